"""Compile options for shac.

All configuration consumed by the compiler lives in one immutable value that
is passed explicitly to the pipeline and the substitution engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class TokenStyle(Enum):
    """Asset placeholder grammar."""

    BARE = "bare"  # @N@ (document format 0.3, default)
    QUOTED = "quoted"  # "@N@", quotes re-emitted around the asset path


DEFAULT_ASSET_SUBDIR = "assets"


@dataclass(frozen=True)
class CompileOptions:
    """Configuration for a single compile run.

    When root_url is not set, the output directory path is used as the root,
    so generated links are relative to wherever the page was written.
    """

    output_dir: Path = Path(".")
    asset_subdir: str = DEFAULT_ASSET_SUBDIR
    root_url: str | None = None
    token_style: TokenStyle = TokenStyle.BARE

    @property
    def asset_dir(self) -> Path:
        return self.output_dir / self.asset_subdir

    @property
    def effective_root_url(self) -> str:
        if self.root_url:
            return self.root_url
        return str(self.output_dir)

    @classmethod
    def from_cli(
        cls,
        *,
        outdir: str | Path = ".",
        assetdir: str = DEFAULT_ASSET_SUBDIR,
        root: str | None = None,
        token_style: str = "bare",
    ) -> CompileOptions:
        """Build CompileOptions from CLI argument values.

        Raises:
            ValueError: If token_style is not a known style
        """
        try:
            style = TokenStyle(token_style)
        except ValueError as exc:
            valid_values = [s.value for s in TokenStyle]
            raise ValueError(
                f"Invalid token style '{token_style}'. Valid values: {valid_values}"
            ) from exc

        return cls(
            output_dir=Path(outdir),
            asset_subdir=assetdir,
            root_url=root or None,
            token_style=style,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization/logging."""
        return {
            "output_dir": str(self.output_dir),
            "asset_subdir": self.asset_subdir,
            "root_url": self.effective_root_url,
            "token_style": self.token_style.value,
        }


__all__ = [
    "CompileOptions",
    "DEFAULT_ASSET_SUBDIR",
    "TokenStyle",
]
