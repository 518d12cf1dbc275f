"""Project-wide exception types."""


class TTimeError(Exception):
    """Base exception for all rating subsystem errors."""


class RatingConfigError(TTimeError):
    """Raised when a rating's configuration cannot be resolved or is invalid."""


class PluginLoadError(TTimeError):
    """Raised when a rating plugin unit fails to load or register."""


class DuplicateRatingError(PluginLoadError):
    """Raised when two different rating types claim the same settings key."""


class RatingConstructionError(TTimeError):
    """Recorded when a registered rating type cannot be instantiated."""


class ScoringError(TTimeError):
    """Raised when a rating fails while computing a schedule's score."""


class MenuActionError(TTimeError):
    """Raised when a rating menu action cannot be dispatched."""


class SettingsError(TTimeError):
    """Raised when persisted settings cannot be read or written."""
