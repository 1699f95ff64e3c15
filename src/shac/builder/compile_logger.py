"""Centralized decision logging for the shac compile pipeline.

These helpers log configuration and per-stage decisions for debugging. User
facing messages stay in the CLI; this module only talks to ``logging``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from shac.model.document import ResolvedAsset
from shac.model.options import CompileOptions

logger = logging.getLogger(__name__)


def log_compile_configuration(options: CompileOptions) -> None:
    """Log the effective compile configuration.

    Args:
        options: Compile options to log
    """
    logger.info("Compile configuration:")
    logger.info("  Output directory: %s", options.output_dir)
    logger.info("  Asset directory: %s", options.asset_dir)
    if options.root_url:
        logger.info("  Root URL: %s", options.root_url)
    else:
        logger.info("  Root URL: %s (defaulted to output directory)", options.effective_root_url)
    logger.info("  Token style: %s", options.token_style.value)


def log_asset_ingested(asset: ResolvedAsset) -> None:
    logger.info("Asset %d: %s -> %s", asset.index, asset.source, asset.asset_id)


def log_unresolved_placeholders(indices: Sequence[int], asset_count: int) -> None:
    """Log placeholders left in place because their index has no asset.

    Args:
        indices: Out-of-range indices found in the body, in document order
        asset_count: Number of declared assets
    """
    if not indices:
        return
    unique = sorted(set(indices))
    logger.warning(
        "%d placeholder(s) reference undeclared assets and were left unchanged: %s "
        "(document declares %d asset(s))",
        len(indices),
        ", ".join(str(i) for i in unique),
        asset_count,
    )


__all__ = [
    "log_asset_ingested",
    "log_compile_configuration",
    "log_unresolved_placeholders",
]
