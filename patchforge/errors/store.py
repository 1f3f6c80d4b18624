from .base import PatchForgeError


class StoreError(PatchForgeError):
    """Reading or writing a project document failed."""
