"""Pure query helpers: input filtering, validation and result shaping."""

from armory.domain.filters import escape_user_input, parse_numeric_term, validate_mod, validate_type
from armory.domain.pagination import UNBOUNDED, page_offset, render_page, to_canonical_json

__all__ = [
    "UNBOUNDED",
    "escape_user_input",
    "page_offset",
    "parse_numeric_term",
    "render_page",
    "to_canonical_json",
    "validate_mod",
    "validate_type",
]
