from .instructions import iter_fenced_blocks, parse_edit_instructions

__all__ = [
    "parse_edit_instructions",
    "iter_fenced_blocks",
]
