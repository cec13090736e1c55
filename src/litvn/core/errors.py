class LitvnError(Exception):
    """Base error."""

class CalendarNotFoundError(LitvnError, KeyError):
    """Raised when a calendar name is not registered."""

class InvalidLunarDateError(LitvnError, ValueError):
    """Raised for a lunar date that does not exist (e.g. a leap flag on a regular month)."""

class SaintsTableError(LitvnError):
    """Raised when the sanctoral table cannot be parsed."""

class CacheError(LitvnError):
    """Raised by the persistent cache for failures callers should see."""

class ReadingTableError(LitvnError):
    """Raised when a reading table file is present but malformed."""
