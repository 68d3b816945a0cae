"""Custom exception hierarchy for the Fantasy Story engine.

Every error raised by the engine inherits from FantasyStoryError, so the
command dispatch boundary can recover from any domain failure with a single
``except`` clause. Domain errors additionally carry an ErrorKind, which is
what callers branch on; the message text is for humans only.

Example:
    >>> from fantasy_story.core.exceptions import CapacityExceededError
    >>> raise CapacityExceededError("Arsenal is full", container="Arsenal", capacity=3)
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Machine-readable classification of recoverable command failures."""

    CAPACITY_EXCEEDED = "capacity_exceeded"
    NOT_FOUND = "not_found"
    WRONG_CAPABILITY = "wrong_capability"
    DUPLICATE_NAME = "duplicate_name"
    UNKNOWN_ARCHETYPE = "unknown_archetype"
    INVALID_TARGET = "invalid_target"
    NOT_OWNED = "not_owned"
    UNKNOWN_COMMAND = "unknown_command"
    MALFORMED_COMMAND = "malformed_command"


class FantasyStoryError(Exception):
    """Base exception for all Fantasy Story errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Story Domain Exceptions
# =============================================================================


class StoryError(FantasyStoryError):
    """Base exception for failures of a single story command.

    These are always recovered at the engine's dispatch boundary and turned
    into one output line. Subclasses set ``kind``.
    """

    kind: ErrorKind = ErrorKind.MALFORMED_COMMAND


class CapacityExceededError(StoryError):
    """Raised when adding an item to a container that is already full."""

    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(
        self,
        message: str,
        *,
        container: str | None = None,
        capacity: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize capacity error with container context.

        Args:
            message: Human-readable error description.
            container: Label of the container that is full.
            capacity: The container's maximum capacity.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if container:
            combined_details["container"] = container
        if capacity is not None:
            combined_details["capacity"] = capacity
        super().__init__(message, details=combined_details)


class NotFoundError(StoryError):
    """Raised when a named entity cannot be resolved."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize lookup error with the missing name.

        Args:
            message: Human-readable error description.
            name: The name that could not be found.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if name:
            combined_details["name"] = name
        super().__init__(message, details=combined_details)


class ItemNotFoundError(NotFoundError):
    """Raised when an item is absent from a container (or was used up)."""


class CharacterNotFoundError(NotFoundError):
    """Raised when a character name is not in the roster."""


class WrongCapabilityError(StoryError):
    """Raised when a character lacks the facet an action requires."""

    kind = ErrorKind.WRONG_CAPABILITY

    def __init__(
        self,
        message: str,
        *,
        character: str | None = None,
        capability: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize capability error.

        Args:
            message: Human-readable error description.
            character: Name of the character missing the facet.
            capability: The item kind whose facet is missing.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if character:
            combined_details["character"] = character
        if capability:
            combined_details["capability"] = capability
        super().__init__(message, details=combined_details)


class DuplicateNameError(StoryError):
    """Raised when creating a character whose name is already taken."""

    kind = ErrorKind.DUPLICATE_NAME


class UnknownArchetypeError(StoryError):
    """Raised for an archetype name that no character type matches."""

    kind = ErrorKind.UNKNOWN_ARCHETYPE


class InvalidTargetError(StoryError):
    """Raised when a spell is cast on a character it does not allow."""

    kind = ErrorKind.INVALID_TARGET


class NotOwnedError(StoryError):
    """Raised when an item is used or claimed by someone other than its owner."""

    kind = ErrorKind.NOT_OWNED


class UnknownCommandError(StoryError):
    """Raised for a command verb the engine does not recognize."""

    kind = ErrorKind.UNKNOWN_COMMAND


class MalformedCommandError(StoryError):
    """Raised when a command line has the wrong shape or a bad number.

    Attributes:
        line: The raw command line, when known.
    """

    kind = ErrorKind.MALFORMED_COMMAND

    def __init__(
        self,
        message: str,
        *,
        line: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        combined_details = details or {}
        if line is not None:
            combined_details["line"] = line
        super().__init__(message, details=combined_details)


# =============================================================================
# Fatal Exceptions
# =============================================================================


class ScriptFormatError(FantasyStoryError):
    """Raised when a script cannot be started (missing or bad action count).

    This is fatal: no command is processed.
    """


class ConfigurationError(FantasyStoryError):
    """Raised when application configuration is invalid.

    This includes invalid values or incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


__all__ = [
    "ErrorKind",
    # Base exception
    "FantasyStoryError",
    # Story exceptions
    "StoryError",
    "CapacityExceededError",
    "NotFoundError",
    "ItemNotFoundError",
    "CharacterNotFoundError",
    "WrongCapabilityError",
    "DuplicateNameError",
    "UnknownArchetypeError",
    "InvalidTargetError",
    "NotOwnedError",
    "UnknownCommandError",
    "MalformedCommandError",
    # Fatal exceptions
    "ScriptFormatError",
    "ConfigurationError",
]
