"""
Local Predictions for Decision-Tree Models

Evaluates decision-tree models exported by a hosted machine-learning
service on-device, with no network round-trip. The network client that
fetches model documents lives elsewhere; this package only reads them.

Key Features:
- Typed predicates over numeric, categorical, text and datetime fields
- Best-effort answers for incomplete input (the walk stops at the deepest
  node it can reach and returns that node's summary)
- Configurable handling of missing-value branches
- Input records keyed by field id or by field name

Usage:
    from local_predict import predict, ModelEvaluator

    result = predict(model_document, '{"000001": 5}', args_by_name=False)
    print(result.value, result.confidence)
"""

from .core import (
    ConfigurationError,
    FieldModel,
    LocalPredictError,
    MissingBranchPolicy,
    Operator,
    Optype,
    ParseError,
    PredictionResult,
    Settings,
    get_settings,
)
from .evaluator import ModelEvaluator, locate_model_body, parse_args, predict
from .registry import ModelInfo, ModelRegistry, extract_resource_id, get_model_registry
from .tree import FieldCatalog, TreeNode, build_catalog, translate_by_field_id, translate_by_name

__version__ = "1.0.0"

__all__ = [
    # Evaluation
    "predict",
    "ModelEvaluator",
    "locate_model_body",
    "parse_args",
    # Registry
    "ModelRegistry",
    "ModelInfo",
    "extract_resource_id",
    "get_model_registry",
    # Tree
    "FieldCatalog",
    "TreeNode",
    "build_catalog",
    "translate_by_field_id",
    "translate_by_name",
    # Core
    "ConfigurationError",
    "FieldModel",
    "LocalPredictError",
    "MissingBranchPolicy",
    "Operator",
    "Optype",
    "ParseError",
    "PredictionResult",
    "Settings",
    "get_settings",
]
