"""
Error taxonomy for the outer surfaces of fedconf (loader, settings, CLI).

Validators never raise for malformed values; they return FieldError lists.
The exceptions here cover everything around them:
- ConfigLoadError: a document could not be read or parsed into a model
- InvalidConfigError: raised on request by ``ensure_valid`` with the full list
- SettingsError: an environment override could not be interpreted

Key features:
- Error code enum (avoid typos)
- Pydantic model for structured error details
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from fedconf.validation.field import FieldError

# ============================================================================
# Error Codes
# ============================================================================


class ErrorCode(str, Enum):
    """Enumeration of all error codes in the system."""

    LOAD_ERROR = "LOAD_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SETTINGS_ERROR = "SETTINGS_ERROR"


# ============================================================================
# Pydantic Error Models
# ============================================================================


class ErrorDetails(BaseModel):
    """Structured error details for serialization."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: ErrorCode = Field(..., description="Error code enum")
    message: str = Field(..., description="Human-readable error message")
    context: dict[str, Any] = Field(default_factory=dict, description="Additional context")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump(mode="json")


# ============================================================================
# Exceptions
# ============================================================================


class FedConfError(Exception):
    """Base class for all fedconf errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_details(self) -> ErrorDetails:
        """Convert to structured ErrorDetails."""
        return ErrorDetails(code=self.code, message=self.message, context=self.details)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "error": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConfigLoadError(FedConfError):
    """Configuration document could not be loaded or parsed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        details = {"source": source} if source else {}
        super().__init__(message, ErrorCode.LOAD_ERROR, details)


class InvalidConfigError(FedConfError):
    """Configuration was parsed but failed validation."""

    def __init__(self, message: str, errors: "list[FieldError]") -> None:
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            {"errors": [error.to_dict() for error in errors]},
        )
        self.errors = list(errors)


class SettingsError(FedConfError):
    """Validator settings could not be resolved."""

    def __init__(self, message: str, variable: str | None = None) -> None:
        details = {"variable": variable} if variable else {}
        super().__init__(message, ErrorCode.SETTINGS_ERROR, details)
