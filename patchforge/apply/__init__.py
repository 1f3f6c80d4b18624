from .indent import capture_indent, reindent
from .patch import apply_edit, apply_edits, apply_edits_to_store, patch_text

__all__ = [
    "apply_edit",
    "apply_edits",
    "apply_edits_to_store",
    "patch_text",
    "capture_indent",
    "reindent",
]
