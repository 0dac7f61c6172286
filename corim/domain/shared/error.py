"""Error hierarchy for corim.

Error layers:
- CorimError: Base class for all corim errors
- DomainError: Construction and structural validation failures
- InfrastructureError: Wire-format and configuration failures

None of these are fatal; every error is returned or raised to the immediate caller.
"""

from enum import StrEnum


class CorimError(Exception):
    """Base class for all corim errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (construction and validation)
# =============================================================================


class DomainError(CorimError):
    """Base class for domain errors."""


class BuildError(DomainError):
    """A builder operation rejected its argument; the container was not modified."""

    def __init__(self, message: str, operation: str, cause: Exception | None = None) -> None:
        super().__init__(message, code="BUILD_ERROR")
        self.operation = operation
        self.cause = cause
        self.__cause__ = cause


class ValidationCategory(StrEnum):
    """Structural checks of the unsigned container, in the order they run."""

    ID = "id"
    TAGS = "tags"
    TAG = "tag"
    DEPENDENT_RIM = "dependent-rim"
    PROFILE = "profile"


class CorimValidationError(DomainError):
    """Structural validation of the unsigned container failed.

    Attributes:
        category: Which check failed.
        position: Zero-based index in the failing sequence, None for
            whole-container checks (id, tags).
        cause: The underlying reason reported by the element.
    """

    def __init__(
        self,
        message: str,
        category: ValidationCategory,
        position: int | None = None,
        cause: str | None = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.category = category
        self.position = position
        self.cause = cause or message


# =============================================================================
# Infrastructure Errors (wire format, settings)
# =============================================================================


class InfrastructureError(CorimError):
    """Base class for infrastructure errors."""


class CodecError(InfrastructureError):
    """Wire data could not be encoded or decoded into the expected shape."""

    def __init__(self, message: str, format: str) -> None:
        super().__init__(message, code="CODEC_ERROR")
        self.format = format


class ConfigurationError(InfrastructureError):
    """Settings are invalid."""
