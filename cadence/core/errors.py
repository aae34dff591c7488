from __future__ import annotations

from typing import Any, Dict, Optional


class CadenceError(Exception):
    """
    Base for errors the pricing/migration core surfaces to its caller.
    Callers map `code` to whatever presentation they need (HTTP status, UI copy).
    """

    code: str = "CADENCE_ERROR"

    def __init__(self, message: str, meta: Optional[Dict[str, Any]] = None):
        self.message = str(message)
        self.meta = meta or {}
        super().__init__(f"{self.code}: {self.message}")


class UnsupportedModelError(CadenceError, ValueError):
    """Pricing-model tag is neither canonical nor a known legacy alias."""

    code = "UNSUPPORTED_MODEL"

    def __init__(self, model: Any):
        self.model = model
        super().__init__(f"Unsupported pricing model: {model}", {"model": model})


class NoRollbackAvailableError(CadenceError):
    code = "NO_ROLLBACK_AVAILABLE"

    def __init__(self, message: str = "No rollback data available"):
        super().__init__(message)
