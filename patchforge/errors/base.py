class PatchForgeError(Exception):
    """Base class for every error raised by patchforge."""
