"""Base exception shared by all dotpick error types."""


class DotpickError(Exception):
    """Base exception for dotpick errors that abort a run."""
