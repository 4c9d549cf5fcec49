"""Pattern parsing, slug primitives, and slug assembly."""

from .assembler import SlugAssembler
from .pattern import parse_pattern
from .slug import normalize_slug_path, slugify_text, trim_slug_part

__all__ = [
    "SlugAssembler",
    "normalize_slug_path",
    "parse_pattern",
    "slugify_text",
    "trim_slug_part",
]
