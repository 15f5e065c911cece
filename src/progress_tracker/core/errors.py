from __future__ import annotations


class ProgressError(Exception):
    pass


class InvalidArgument(ProgressError, ValueError):
    """Missing or out-of-range value (non-positive total, negative step delta, ...)."""


class InvalidState(ProgressError, RuntimeError):
    """Operation attempted after the tracked process has left its initial state."""


class StyleNotFound(ProgressError, LookupError):
    pass
