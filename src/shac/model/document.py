"""Document data structures shared by the parser, asset store and builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

PAGE_DIRECTIVE = "@page"
ASSET_DIRECTIVE = "@asset"
IGNORE_DIRECTIVE = "@ignore"
BODY_MARKER = "@html"


@dataclass(frozen=True)
class DocumentHeader:
    """Parsed directive header of a source document.

    - page_name: output file name taken from the ``@page`` directive
    - assets: declared asset paths; position is the placeholder index
    """

    page_name: str
    assets: tuple[str, ...] = ()

    def to_text(self) -> str:
        lines = [f"{PAGE_DIRECTIVE} {self.page_name}"]
        lines.extend(f"{ASSET_DIRECTIVE} {path}" for path in self.assets)
        lines.append(BODY_MARKER)
        return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class ResolvedAsset:
    index: int
    source: str
    asset_id: str


@dataclass(slots=True)
class CompileResult:
    output_path: Path
    page_name: str
    assets: list[ResolvedAsset] = field(default_factory=list)
    # Placeholder indices in the body with no matching asset
    unresolved_indices: list[int] = field(default_factory=list)


__all__ = [
    "ASSET_DIRECTIVE",
    "BODY_MARKER",
    "CompileResult",
    "DocumentHeader",
    "IGNORE_DIRECTIVE",
    "PAGE_DIRECTIVE",
    "ResolvedAsset",
]
