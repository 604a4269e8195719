"""Custom exception hierarchy for TurboGrid."""

from __future__ import annotations


class TurboGridError(Exception):
    """Base class for all custom errors raised by TurboGrid."""


# --- Grid source boundary ---

class BoundaryError(TurboGridError):
    """Raised when a call across the grid source boundary fails."""


class GridRangeError(BoundaryError):
    """Raised when a requested row or column range leaves the grid."""


class SourceUnavailableError(BoundaryError):
    """Raised when the grid engine cannot be reached."""


# --- Fetch dispatch ---

class DispatchError(TurboGridError):
    """Raised when a background fetch fails without a usable exception."""


# --- Settings ---

class SettingsError(TurboGridError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "BoundaryError",
    "DispatchError",
    "GridRangeError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
    "SourceUnavailableError",
    "TurboGridError",
]
