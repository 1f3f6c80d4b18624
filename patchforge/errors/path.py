from .store import StoreError


class PathViolation(StoreError):
    """A document path resolved outside the project root."""
