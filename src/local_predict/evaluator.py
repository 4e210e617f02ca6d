"""
Local evaluation of decision-tree models.

ModelEvaluator parses a model document once (field catalog, tree,
objective field) and answers any number of predictions from it without
network access. The module-level `predict()` is the one-shot form.

Usage:
    from local_predict import ModelEvaluator, predict

    result = predict(model_document, '{"000001": 5}', args_by_name=False)
    result.value, result.confidence

    evaluator = ModelEvaluator(model_document)
    evaluator.predict({"petal length": 2.1}, by_name=True)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from .core.errors import ConfigurationError, ParseError
from .core.models import PredictionResult
from .core.types import DEFAULT_POLICY, MissingBranchPolicy
from .tree.catalog import FieldCatalog, InputRecord, build_catalog, translate_by_field_id
from .tree.node import TreeNode, parse_node
from .tree.node import predict as walk_tree

logger = logging.getLogger(__name__)

ArgsPayload = str | bytes | Mapping[str, Any]


def locate_model_body(model_document: Any) -> tuple[Mapping[str, Any], str]:
    """
    Find the tree body and objective field id in a model document.

    Accepts the bare body `{fields, root, objective_field}` as well as the
    resource shapes returned by the service, `{"model": {...}}` and
    `{"object": {"model": {...}}}`. The objective field may be given as
    `objective_field` or as the first entry of `objective_fields`, on the
    body or on the enclosing resource.

    Raises:
        ParseError: If the document lacks a root, a fields map or an objective field
    """
    if not isinstance(model_document, Mapping):
        raise ParseError("Model document must be a mapping")

    resource = model_document
    if isinstance(resource.get("object"), Mapping):
        resource = resource["object"]
    body = resource["model"] if isinstance(resource.get("model"), Mapping) else resource

    if "root" not in body:
        raise ParseError("Model document has no tree root")
    if "fields" not in body:
        raise ParseError("Model document has no fields map")

    objective = _objective_field(body)
    if objective is None:
        objective = _objective_field(resource)
    if objective is None:
        raise ParseError("Model document has no objective field")
    return body, objective


def _objective_field(section: Mapping[str, Any]) -> str | None:
    objective = section.get("objective_field")
    if objective:
        return str(objective)
    objectives = section.get("objective_fields")
    if isinstance(objectives, list) and objectives:
        return str(objectives[0])
    return None


def parse_args(args_payload: ArgsPayload) -> InputRecord:
    """
    Decode an arguments payload into an input record.

    Args:
        args_payload: JSON object text (e.g. `{"000001": 1}`) or an
            already-decoded mapping

    Raises:
        ParseError: If the payload is not a JSON object of scalar values
    """
    if isinstance(args_payload, Mapping):
        decoded: Any = args_payload
    else:
        try:
            decoded = json.loads(args_payload)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Arguments payload is not valid JSON: {e}") from e

    if not isinstance(decoded, Mapping):
        raise ParseError("Arguments payload must be a JSON object")

    record: InputRecord = {}
    for key, value in decoded.items():
        if value is not None and not isinstance(value, (str, int, float, bool)):
            raise ParseError(f"Argument {key!r} must be a scalar, got {type(value).__name__}")
        record[str(key)] = value
    return record


class ModelEvaluator:
    """
    Parsed, read-only view of one decision-tree model.

    Safe to share between threads: nothing is mutated after construction.
    """

    def __init__(self, model_document: Any, policy: MissingBranchPolicy | None = None):
        """
        Parse a model document.

        Args:
            model_document: Decoded model document or service resource
            policy: Missing-branch rules (defaults to DEFAULT_POLICY)

        Raises:
            ParseError: If the document is malformed
            ConfigurationError: If a predicate or the objective field does not fit the fields
        """
        self.policy = policy or DEFAULT_POLICY

        body, objective_field = locate_model_body(model_document)
        self.catalog: FieldCatalog = build_catalog(body["fields"])
        if objective_field not in self.catalog:
            raise ConfigurationError(
                f"Objective field {objective_field} is not among the model fields",
                field_id=objective_field,
            )
        self.objective_field = objective_field
        self.root: TreeNode = parse_node(body["root"], self.catalog, self.policy)

        logger.debug(
            "Parsed model: %d fields, %d nodes, objective %s",
            len(self.catalog), self.root.node_count(), objective_field,
        )

    @property
    def objective_name(self) -> str:
        return self.catalog[self.objective_field].name

    def input_record(self, args: ArgsPayload, by_name: bool = False) -> InputRecord:
        """Normalize arguments into the id-keyed record the tree reads."""
        record = parse_args(args)
        if by_name:
            record = translate_by_field_id(record, self.catalog)
        return record

    def predict(self, args: ArgsPayload, by_name: bool = False) -> PredictionResult:
        """
        Predict the objective field for one set of arguments.

        Args:
            args: JSON object text or mapping of field id (or name) -> value
            by_name: Whether `args` is keyed by field name

        Returns:
            PredictionResult
        """
        record = self.input_record(args, by_name=by_name)
        return walk_tree(self.root, record, self.policy, self.catalog)


def predict(
    model_document: Any,
    args_payload: ArgsPayload,
    args_by_name: bool = False,
    policy: MissingBranchPolicy | None = None,
) -> PredictionResult:
    """
    One-shot local prediction.

    Parses `model_document` and evaluates `args_payload` against it. Pure:
    no network access and no shared state.

    Raises:
        ParseError: If the model document or payload is malformed
        ConfigurationError: If the model's predicates do not fit its fields
    """
    return ModelEvaluator(model_document, policy=policy).predict(args_payload, by_name=args_by_name)
