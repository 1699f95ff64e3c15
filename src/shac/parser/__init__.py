from __future__ import annotations

__all__ = [
    "LineSource",
    "parse_asset_directives",
    "parse_header",
    "parse_header_text",
    "parse_page_name",
]

# Re-export header parsing entry points (explicit alias marks intent for linters)
from .header import LineSource as LineSource
from .header import parse_asset_directives as parse_asset_directives
from .header import parse_header as parse_header
from .header import parse_header_text as parse_header_text
from .header import parse_page_name as parse_page_name
