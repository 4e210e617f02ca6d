"""
Core module for local predictions.

This module provides the foundational components:
- Configuration management (config.py)
- Error types (errors.py)
- Data models (models.py)
- Optype/operator enums and the missing-branch policy (types.py)

Usage:
    from local_predict.core import Settings, get_settings
    from local_predict.core import Optype, Operator, MissingBranchPolicy
    from local_predict.core import ParseError, ConfigurationError
"""

# Configuration
from .config import Settings, get_settings

# Errors
from .errors import ConfigurationError, LocalPredictError, ParseError

# Types
from .types import (
    DEFAULT_POLICY,
    MissingBranchPolicy,
    Operator,
    Optype,
)

# Models
from .models import FieldModel, PredictionResult

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "LocalPredictError",
    "ParseError",
    "ConfigurationError",
    # Types
    "DEFAULT_POLICY",
    "MissingBranchPolicy",
    "Operator",
    "Optype",
    # Models
    "FieldModel",
    "PredictionResult",
]
