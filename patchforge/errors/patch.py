from .base import PatchForgeError


class PatchFailedError(PatchForgeError):
    """Raised by strict application helpers when an edit cannot be located."""
