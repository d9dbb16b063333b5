"""Custom exception hierarchy for the SVG sprite store.

This module defines domain-specific exceptions to provide better error handling,
clearer intent, and improved debugging capabilities throughout the package.

Exception Hierarchy:
    SpriteStoreError (Base)
    ├── ConfigurationError
    │   ├── InvalidConfigError
    │   └── ConfigFileNotFoundError
    └── SpriteError
        ├── SvgParseError
        ├── MissingDimensionsError
        ├── IconNameCollisionError
        └── UnknownSpriteError
"""

from typing import Any


# Base Exception
class SpriteStoreError(Exception):
    """Base exception for all sprite store errors.

    This is the root exception that all custom exceptions inherit from,
    allowing for broad exception handling when needed.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the exception with message and optional details.

        Args:
            message: Human-readable error description
            details: Optional dictionary containing additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(SpriteStoreError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration contains invalid values.

    Example:
        raise InvalidConfigError(
            "Invalid layout options",
            {"field": "iconHeight", "value": 0, "reason": "Must be positive"}
        )
    """
    pass


class ConfigFileNotFoundError(ConfigurationError):
    """Raised when configuration file cannot be found.

    Example:
        raise ConfigFileNotFoundError(
            "Configuration file not found",
            {"path": "sprites.yaml"}
        )
    """
    pass


# Sprite Exceptions
class SpriteError(SpriteStoreError):
    """Base exception for errors raised while building a sprite."""
    pass


class SvgParseError(SpriteError):
    """Raised when an icon's SVG source cannot be parsed.

    Example:
        raise SvgParseError(
            "Malformed SVG document",
            {"error": "mismatched tag: line 3, column 2"}
        )
    """
    pass


class MissingDimensionsError(SpriteError):
    """Raised when an icon's width and height cannot be determined.

    Neither explicit ``width``/``height`` attributes nor a ``viewBox`` gave two
    numeric values. The sprite holding the icon is skipped for the current
    generation pass.

    Attributes:
        sprite_name: Name of the sprite the icon belongs to
        icon_name: Name of the offending icon
    """

    def __init__(self, sprite_name: str, icon_name: str) -> None:
        """Initialize the exception for the given sprite and icon.

        Args:
            sprite_name: Name of the sprite the icon belongs to
            icon_name: Name of the offending icon
        """
        super().__init__(
            f'the icon "{icon_name}" in the sprite "{sprite_name}": dimension information '
            "is missing. Either specify the viewBox attribute or the height and width "
            "attributes.",
            {"sprite": sprite_name, "icon": icon_name},
        )
        self.sprite_name = sprite_name
        self.icon_name = icon_name


class IconNameCollisionError(SpriteError):
    """Raised when two different icons derive the same symbol name.

    Example:
        raise IconNameCollisionError(
            "Symbol name already in use",
            {"symbol": "icon-home-1a2b3", "identity": "/a/home.svg", "existing": "/b/home.svg"}
        )
    """
    pass


class UnknownSpriteError(SpriteError):
    """Raised when a sprite key was never registered in the store.

    Example:
        raise UnknownSpriteError("Unknown sprite", {"sprite": "img/icons.[hash].svg"})
    """
    pass


# Utility function for exception chaining
def chain_exception(new_exception: SpriteStoreError, cause: Exception) -> SpriteStoreError:
    """Chain a new exception with its underlying cause.

    Args:
        new_exception: The new domain-specific exception to raise
        cause: The underlying exception that caused this error

    Returns:
        The new exception with cause properly chained

    Example:
        try:
            root = ElementTree.fromstring(content)
        except ElementTree.ParseError as e:
            raise chain_exception(SvgParseError("Malformed SVG document"), e)
    """
    new_exception.__cause__ = cause
    return new_exception
