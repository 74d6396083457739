"""Domain exceptions.

All storefront errors derive from DomainError. Most recoverable conditions
(unknown product ids, out-of-range shades, failed wishlist writes) are
absorbed where they happen; only the ones below are ever raised.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching storefront-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid state transition is attempted."""

    def __init__(
        self,
        entity_type: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of state holder (e.g., "View").
            current_state: Current state.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type} "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Catalog Errors
# ============================================================================


class CatalogUnavailableError(DomainError):
    """Raised when the catalog document cannot be fetched or is invalid."""

    def __init__(
        self,
        source: str,
        reason: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize catalog unavailable error.

        Args:
            source: URL or path the catalog was loaded from.
            reason: What went wrong.
            status_code: HTTP status code, when the failure was an HTTP response.
        """
        super().__init__(
            f"Catalog unavailable from {source}: {reason}",
            details={"source": source, "reason": reason, "status_code": status_code},
        )
        self.source = source
        self.reason = reason
        self.status_code = status_code


# ============================================================================
# Filter Errors
# ============================================================================


class InvalidPriceRangeError(DomainError):
    """Raised when a price token is not "<min>" or "<min>-<max>"."""

    def __init__(self, token: str) -> None:
        """Initialize invalid price range error.

        Args:
            token: The rejected price token.
        """
        super().__init__(
            f"Invalid price range token '{token}'. "
            "Expected '<min>' or '<min>-<max>' with non-negative integers",
            details={"token": token},
        )
        self.token = token


# ============================================================================
# Command Errors
# ============================================================================


class UnknownCommandError(DomainError):
    """Raised when a raw event names a command type that does not exist."""

    def __init__(self, command_type: str, known_types: list[str]) -> None:
        """Initialize unknown command error.

        Args:
            command_type: The unrecognized command type.
            known_types: Command types that are registered.
        """
        super().__init__(
            f"Unknown command type '{command_type}'",
            details={"command_type": command_type, "known_types": known_types},
        )
        self.command_type = command_type


class InvalidCommandError(DomainError):
    """Raised when a raw event is missing fields or carries bad values."""

    def __init__(self, command_type: str, reason: str) -> None:
        """Initialize invalid command error.

        Args:
            command_type: Type of the rejected command.
            reason: What was wrong with the payload.
        """
        super().__init__(
            f"Invalid '{command_type}' command: {reason}",
            details={"command_type": command_type, "reason": reason},
        )
        self.command_type = command_type
