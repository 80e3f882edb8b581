"""State management errors."""


class StateError(Exception):
    """Raised when persisted favorites cannot be read."""
