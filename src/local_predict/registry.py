"""
Model Registry for local evaluators

Caches parsed model documents by resource id and loads the documents the
network layer saved to local storage.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from .core.config import get_settings
from .core.errors import ParseError
from .core.types import MissingBranchPolicy
from .evaluator import ModelEvaluator

logger = logging.getLogger(__name__)

RESOURCE_PREFIX = "model/"


@dataclass
class ModelInfo:
    """Information about a registered model."""

    resource_id: str
    objective_field: str
    field_count: int
    node_count: int
    depth: int
    model_path: str | None
    loaded_at: datetime


def extract_resource_id(resource: str) -> str:
    """
    Strip the resource type from a resource string.

    "model/5143a51a37203f2cf7000972" -> "5143a51a37203f2cf7000972"
    """
    return resource.rsplit("/", 1)[-1] if "/" in resource else resource


class ModelRegistry:
    """
    Central registry for local model evaluators.

    Handles:
    - Parsing model documents once and caching the evaluators
    - Loading cached model documents from storage
    """

    def __init__(
        self,
        storage_path: Path | str | None = None,
        policy: MissingBranchPolicy | None = None,
    ):
        """
        Initialize model registry.

        Args:
            storage_path: Directory of <resource-id>.json model documents
            policy: Missing-branch rules passed to every evaluator
        """
        settings = get_settings()
        self._storage_path = Path(storage_path) if storage_path else settings.model_storage_path
        self._policy = policy or MissingBranchPolicy.from_settings(settings)
        self._models: dict[str, ModelEvaluator] = {}
        self._model_info: dict[str, ModelInfo] = {}

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def register(
        self,
        resource_id: str,
        model_document: Any,
        model_path: str | None = None,
    ) -> ModelEvaluator:
        """
        Parse and register a model document.

        Args:
            resource_id: Model identifier, with or without the "model/" prefix
            model_document: Decoded model document
            model_path: File the document was read from (optional)

        Returns:
            The registered evaluator
        """
        key = extract_resource_id(resource_id)
        evaluator = ModelEvaluator(model_document, policy=self._policy)

        self._models[key] = evaluator
        self._model_info[key] = ModelInfo(
            resource_id=f"{RESOURCE_PREFIX}{key}",
            objective_field=evaluator.objective_field,
            field_count=len(evaluator.catalog),
            node_count=evaluator.root.node_count(),
            depth=evaluator.root.depth(),
            model_path=model_path,
            loaded_at=datetime.now(),
        )

        logger.info(f"Registered model: {key}")
        return evaluator

    def get(self, resource_id: str) -> ModelEvaluator | None:
        """Get a registered evaluator, or None."""
        return self._models.get(extract_resource_id(resource_id))

    def get_info(self, resource_id: str) -> ModelInfo | None:
        return self._model_info.get(extract_resource_id(resource_id))

    def load(self, resource_id: str) -> ModelEvaluator | None:
        """
        Load a model document from storage.

        Args:
            resource_id: Model identifier, with or without the "model/" prefix

        Returns:
            Registered evaluator, or None if no document is stored

        Raises:
            ParseError: If the stored document is not valid JSON or not a valid model
        """
        key = extract_resource_id(resource_id)
        model_file = self._storage_path / f"{key}.json"

        if not model_file.exists():
            logger.warning(f"Model document not found: {model_file}")
            return None

        try:
            with open(model_file, encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise ParseError(f"Model document {model_file} is not valid JSON: {e}") from e

        return self.register(key, document, model_path=str(model_file))

    def get_or_load(self, resource_id: str) -> ModelEvaluator | None:
        return self.get(resource_id) or self.load(resource_id)

    def unload(self, resource_id: str) -> None:
        """Drop a model from memory."""
        key = extract_resource_id(resource_id)

        if key in self._models:
            del self._models[key]
            del self._model_info[key]
            logger.info(f"Unloaded model: {key}")

    def list_models(self) -> list[ModelInfo]:
        """List all registered models."""
        return list(self._model_info.values())

    def stored_models(self) -> list[str]:
        """Resource ids of the model documents present in storage."""
        if not self._storage_path.is_dir():
            return []
        return sorted(f"{RESOURCE_PREFIX}{p.stem}" for p in self._storage_path.glob("*.json"))


# Global registry instance
_registry: ModelRegistry | None = None


def get_model_registry() -> ModelRegistry:
    """Get the global model registry instance."""
    global _registry
    if _registry is None:
        _registry = ModelRegistry()
    return _registry
