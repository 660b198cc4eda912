"""Domain errors raised by the Savr core and services."""


class SavrError(Exception):
    """Base class for Savr domain errors."""


class InvalidProfileError(SavrError):
    """Raised when a profile update cannot be applied."""


class ProfileNotFoundError(SavrError):
    """Raised when a user has no stored profile."""


class InvalidMealError(SavrError):
    """Raised when a meal entry cannot be written to a daily log."""


class MealNotFoundError(SavrError):
    """Raised when an update references a meal absent from the log."""


class RecipeNotFoundError(SavrError):
    """Raised when a saved recipe does not exist."""


class PantryItemNotFoundError(SavrError):
    """Raised when a pantry item does not exist."""


class EmptyPantrySelectionError(SavrError):
    """Raised when recipe generation is requested with nothing selected."""


class ConcurrentUpdateError(SavrError):
    """Raised when a compare-and-swap write keeps losing to other writers."""


class ProductNotFoundError(SavrError):
    """Raised when a barcode is unknown to the product database."""
