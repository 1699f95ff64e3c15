"""Directive header parser.

A source document starts with a line-oriented header::

    @page <page name>
    @asset <path>        (zero or more)
    @html
    <body bytes>

``@ignore`` on the first line opts the document out of the build.
"""

from __future__ import annotations

import io
import logging
from typing import Protocol

from ..errors import DocumentSkipped, HeaderSyntaxError, PrematureEndOfInput
from ..model.document import (
    ASSET_DIRECTIVE,
    BODY_MARKER,
    IGNORE_DIRECTIVE,
    PAGE_DIRECTIVE,
    DocumentHeader,
)

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    def readline(self) -> bytes:  # pragma: no cover - typing
        ...


def _read_line(stream: LineSource, line_no: int) -> str:
    raw = stream.readline()
    # A line without its newline means the input ended mid-header
    if not raw.endswith(b"\n"):
        raise PrematureEndOfInput(line_no)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HeaderSyntaxError("header is not valid UTF-8", line_no) from exc


def _directive_argument(line: str) -> str:
    parts = line.split(" ")
    return " ".join(parts[1:]).strip()


def parse_page_name(stream: LineSource) -> str:
    raw = stream.readline()
    if raw.startswith(IGNORE_DIRECTIVE.encode()):
        raise DocumentSkipped()
    if not raw.endswith(b"\n"):
        raise PrematureEndOfInput(1)
    try:
        line = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise HeaderSyntaxError("header is not valid UTF-8", 1) from exc

    if not line.startswith(PAGE_DIRECTIVE):
        raise HeaderSyntaxError(f"no {PAGE_DIRECTIVE} found at line 1", 1)

    name = _directive_argument(line)
    if not name:
        raise HeaderSyntaxError(f"no input given to {PAGE_DIRECTIVE}", 1)
    return name


def parse_asset_directives(stream: LineSource, *, first_line: int = 2) -> list[str]:
    """Read ``@asset`` lines up to and including the ``@html`` marker."""

    assets: list[str] = []
    line_no = first_line
    while True:
        line = _read_line(stream, line_no).strip(" \t\r\n")
        if line == BODY_MARKER:
            return assets

        if not line.startswith(ASSET_DIRECTIVE):
            raise HeaderSyntaxError("invalid directive", line_no)

        path = _directive_argument(line)
        if not path:
            raise HeaderSyntaxError(f"no input given to {ASSET_DIRECTIVE}", line_no)

        logger.debug("Declared asset %d at line %d: %s", len(assets), line_no, path)
        assets.append(path)
        line_no += 1


def parse_header(stream: LineSource) -> DocumentHeader:
    """Parse the directive header and leave ``stream`` at the start of the body.

    Raises:
        DocumentSkipped: first line is ``@ignore``
        HeaderSyntaxError: a line violates the directive grammar
        PrematureEndOfInput: input ended before ``@html``
    """
    page_name = parse_page_name(stream)
    assets = parse_asset_directives(stream)
    return DocumentHeader(page_name=page_name, assets=tuple(assets))


def parse_header_text(text: str | bytes) -> tuple[DocumentHeader, bytes]:
    """Parse an in-memory document, returning the header and the raw body."""

    data = text.encode("utf-8") if isinstance(text, str) else text
    stream = io.BytesIO(data)
    header = parse_header(stream)
    return header, stream.read()


__all__ = [
    "LineSource",
    "parse_asset_directives",
    "parse_header",
    "parse_header_text",
    "parse_page_name",
]
