"""Engine errors."""


class InvalidIntent(ValueError):
    """A submitted intent or decision answer was rejected before any state changed."""
