from .base import PatchForgeError
from .collaborator import CollaboratorError
from .patch import PatchFailedError
from .path import PathViolation
from .store import StoreError

__all__ = [
    "PatchForgeError",
    "PatchFailedError",
    "CollaboratorError",
    "StoreError",
    "PathViolation",
]
