"""
Pydantic models for field metadata and prediction results.

These models are used for:
- Validated field metadata held by the field catalog
- Prediction results returned to callers and serialized by the CLI
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import Optype


class FieldModel(BaseModel):
    """One field of a model, keyed by its id in the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    optype: Optype


class PredictionResult(BaseModel):
    """Predicted value with its confidence."""

    model_config = ConfigDict(frozen=True)

    value: Any
    confidence: float = Field(ge=0.0, le=1.0)
    count: Optional[int] = None
    path: list[str] = Field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """The `{value, confidence}` pair exposed to the network layer."""
        return {"value": self.value, "confidence": self.confidence}
