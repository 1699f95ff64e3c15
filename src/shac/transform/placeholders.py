from __future__ import annotations

import os
import posixpath
import re
from collections.abc import Sequence

from ..model.document import ResolvedAsset
from ..model.options import DEFAULT_ASSET_SUBDIR, TokenStyle

_ASSET_RES: dict[TokenStyle, re.Pattern[bytes]] = {
    TokenStyle.BARE: re.compile(rb"@(?P<index>\d+)@"),
    TokenStyle.QUOTED: re.compile(rb'"@(?P<index>\d+)@"'),
}

_ROOT_RE = re.compile(rb"@\$@")


def _asset_ids(resolved_assets: Sequence[str | ResolvedAsset]) -> list[str]:
    return [a.asset_id if isinstance(a, ResolvedAsset) else a for a in resolved_assets]


def asset_path(asset_id: str, asset_subdir: str = DEFAULT_ASSET_SUBDIR) -> str:
    """Document-relative path of a stored asset, always with forward slashes."""

    if not asset_subdir:
        return asset_id
    return posixpath.join(asset_subdir.replace("\\", "/"), asset_id)


def find_asset_indices(body: bytes, token_style: TokenStyle = TokenStyle.BARE) -> list[int]:
    """Return the asset indices referenced by placeholders, in document order."""

    return [int(m.group("index")) for m in _ASSET_RES[token_style].finditer(body)]


def _asset_segments(
    body: bytes,
    resolved_assets: Sequence[str | ResolvedAsset],
    asset_subdir: str,
    token_style: TokenStyle,
) -> list[tuple[bytes, bool]]:
    """Split ``body`` into (chunk, inserted) pairs after resolving asset tokens.

    Unresolved tokens stay part of the surrounding source text.
    """

    ids = _asset_ids(resolved_assets)
    quoted = token_style is TokenStyle.QUOTED
    segments: list[tuple[bytes, bool]] = []
    start = 0
    for m in _ASSET_RES[token_style].finditer(body):
        index = int(m.group("index"))
        if index >= len(ids):
            continue
        segments.append((body[start : m.start()], False))
        path = os.fsencode(asset_path(ids[index], asset_subdir))
        segments.append((b'"' + path + b'"' if quoted else path, True))
        start = m.end()
    segments.append((body[start:], False))
    return segments


def replace_asset_placeholders(
    body: bytes,
    resolved_assets: Sequence[str | ResolvedAsset],
    *,
    asset_subdir: str = DEFAULT_ASSET_SUBDIR,
    token_style: TokenStyle = TokenStyle.BARE,
) -> bytes:
    """Replace asset-index tokens with asset paths.

    - @0@ -> assets/<id>            (bare)
    - "@0@" -> "assets/<id>"        (quoted)
    - Out-of-range indices are left untouched
    """

    segments = _asset_segments(body, resolved_assets, asset_subdir, token_style)
    return b"".join(chunk for chunk, _ in segments)


def replace_root_placeholders(body: bytes, root_url: str) -> bytes:
    """Replace every @$@ with root_url verbatim."""

    # Same bytes the filesystem would use, so undecodable argv survives intact
    root = os.fsencode(root_url)
    # A callable keeps backslashes in the URL from being read as group references
    return _ROOT_RE.sub(lambda _m: root, body)


def substitute(
    body: bytes,
    resolved_assets: Sequence[str | ResolvedAsset],
    root_url: str,
    *,
    asset_subdir: str = DEFAULT_ASSET_SUBDIR,
    token_style: TokenStyle = TokenStyle.BARE,
) -> bytes:
    """Run both placeholder passes over a document body.

    Pure and deterministic. Asset tokens are resolved first, then root tokens
    in the source text between them. Asset paths inserted by the first pass
    are never scanned for root tokens, and the root URL is never re-scanned.
    """

    out = bytearray()
    source = bytearray()
    for chunk, inserted in _asset_segments(body, resolved_assets, asset_subdir, token_style):
        if inserted:
            out += replace_root_placeholders(bytes(source), root_url)
            source.clear()
            out += chunk
        else:
            source += chunk
    out += replace_root_placeholders(bytes(source), root_url)
    return bytes(out)


__all__ = [
    "asset_path",
    "find_asset_indices",
    "replace_asset_placeholders",
    "replace_root_placeholders",
    "substitute",
]
