"""Exceptions raised by the character build engine."""


class CharacterBuildError(Exception):
    """Base class for every failure the engine reports."""


class CatalogLoadError(CharacterBuildError):
    """Raised when the static catalog file cannot be loaded or parsed."""


class BudgetExceededError(CharacterBuildError):
    """Raised when an attribute change would push the total over the budget."""

    def __init__(self, attempted_total: int, budget: int) -> None:
        self.attempted_total = attempted_total
        self.budget = budget
        super().__init__(
            f"Total attributes cannot exceed {budget}. "
            "Please decrease another attribute first."
        )


class UnknownAttributeError(CharacterBuildError, KeyError):
    """Raised when an attribute name is not part of the character's attribute set."""

    def __str__(self) -> str:
        return f"Unknown attribute: {self.args[0]!r}"


class CharacterNotFoundError(CharacterBuildError, IndexError):
    """Raised when no character exists at the requested position."""


class SyncError(CharacterBuildError):
    """Base class for remote load/save failures."""


class RequestFailedError(SyncError):
    """Raised on transport failures or non-success responses."""


class InvalidPayloadError(SyncError):
    """Raised when a load response does not carry a usable character."""
