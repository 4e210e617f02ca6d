"""
Error types for local predictions.

Missing input data is not an error: the tree walk answers with the
summary of the deepest node it could reach.
"""


class LocalPredictError(Exception):
    """Base exception for local prediction errors."""

    def __init__(self, message: str, code: str = "LOCAL_PREDICT_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code


class ParseError(LocalPredictError):
    """Malformed model document or arguments payload."""

    def __init__(self, message: str):
        super().__init__(message, code="PARSE_ERROR")


class ConfigurationError(LocalPredictError):
    """Predicate that does not fit the model's fields (operator/optype, unknown field)."""

    def __init__(self, message: str, field_id: str | None = None):
        super().__init__(message, code="CONFIGURATION_ERROR")
        self.field_id = field_id
