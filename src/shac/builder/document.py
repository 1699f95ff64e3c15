"""Compile pipeline: header -> assets -> placeholders -> output document.

Stages run strictly in sequence. Parse errors surface before the filesystem
is touched; filesystem errors abort the run, leaving any asset files already
written in place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from shac.builder.compile_logger import (
    log_asset_ingested,
    log_compile_configuration,
    log_unresolved_placeholders,
)
from shac.builder.output import atomic_write_bytes
from shac.errors import DocumentSkipped, OutputWriteError, SourceOpenError, SourceReadError
from shac.ingest.asset_store import AssetStore
from shac.model.document import CompileResult
from shac.model.options import CompileOptions
from shac.parser.header import parse_header
from shac.transform.placeholders import find_asset_indices, substitute

logger = logging.getLogger(__name__)


def _stream_path(stream: object) -> Path:
    name = getattr(stream, "name", None)
    return Path(name if isinstance(name, str) else "<stdin>")


class DocumentSource(Protocol):
    def readline(self) -> bytes:  # pragma: no cover - typing
        ...

    def read(self) -> bytes:  # pragma: no cover - typing
        ...


def compile_document(
    stream: DocumentSource,
    options: CompileOptions,
    *,
    base_dir: Path | None = None,
) -> CompileResult | None:
    """Compile one source document into ``options.output_dir``.

    Returns None when the document is marked ``@ignore``.

    Raises:
        ParseError: the header is malformed or incomplete
        SystemFailure: the source could not be read, or an asset or the output
            document could not be written
    """
    log_compile_configuration(options)

    try:
        header = parse_header(stream)
    except DocumentSkipped:
        logger.info("Document marked @ignore; nothing to do")
        return None
    except OSError as exc:
        raise SourceReadError(_stream_path(stream), exc) from exc
    logger.info("Page '%s' declares %d asset(s)", header.page_name, len(header.assets))

    store = AssetStore(options.asset_dir, base_dir=base_dir)
    store.ensure_directory()
    assets = store.ingest_all(header.assets)
    for asset in assets:
        log_asset_ingested(asset)

    try:
        body = stream.read()
    except OSError as exc:
        raise SourceReadError(_stream_path(stream), exc) from exc

    unresolved = [i for i in find_asset_indices(body, options.token_style) if i >= len(assets)]
    log_unresolved_placeholders(unresolved, len(assets))

    final = substitute(
        body,
        assets,
        options.effective_root_url,
        asset_subdir=options.asset_subdir,
        token_style=options.token_style,
    )

    output_path = options.output_dir / header.page_name
    try:
        atomic_write_bytes(output_path, final)
    except OSError as exc:
        raise OutputWriteError(output_path, exc) from exc
    logger.info("Wrote %s (%d bytes)", output_path, len(final))

    return CompileResult(
        output_path=output_path,
        page_name=header.page_name,
        assets=assets,
        unresolved_indices=unresolved,
    )


def compile_file(source: Path, options: CompileOptions) -> CompileResult | None:
    """Open ``source`` and compile it; asset paths resolve from the working directory."""

    try:
        stream = source.open("rb")
    except OSError as exc:
        raise SourceOpenError(source, exc) from exc
    with stream:
        return compile_document(stream, options)


__all__ = ["DocumentSource", "compile_document", "compile_file"]
