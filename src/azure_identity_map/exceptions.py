"""
Exception hierarchy for Azure Identity Map

Every conversion failure is raised as an ``IdentityMapError`` subclass carrying
a human-readable message plus optional structured context for logging.
"""

from typing import Any, Dict, Optional


class IdentityMapError(Exception):
    """
    Base exception class for all identity conversion errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return the message; structured detail lives in ``describe()``."""
        return self.message

    def describe(self) -> str:
        """Return a formatted error message with code, context and cause."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


class InvalidIdentityError(IdentityMapError):
    """Raised when an identity block violates the type/identity_ids rules."""

    def __init__(
        self, message: str, identity_type: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if identity_type:
            context["type"] = identity_type
        kwargs["context"] = context
        kwargs.setdefault("error_code", "INVALID_IDENTITY")
        super().__init__(message, **kwargs)


class IdentityIdParseError(IdentityMapError):
    """Raised when an identity ID cannot be parsed as a User Assigned Identity ID."""

    def __init__(self, raw_id: str, cause: Exception, **kwargs: Any) -> None:
        self.raw_id = raw_id
        context = kwargs.get("context", {})
        context["identity_id"] = raw_id
        kwargs["context"] = context
        kwargs.setdefault("error_code", "IDENTITY_ID_PARSE_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Use the full ID of a Microsoft.ManagedIdentity/userAssignedIdentities resource",
        )
        super().__init__(
            f'parsing "{raw_id}" as a User Assigned Identity ID: {cause}',
            cause=cause,
            **kwargs,
        )


class ResourceIdParseError(ValueError):
    """Raised by the resource ID parser when a segment does not match."""

    def __init__(self, resource_id: str, reason: str) -> None:
        super().__init__(f"parsing {resource_id!r}: {reason}")
        self.resource_id = resource_id
        self.reason = reason
