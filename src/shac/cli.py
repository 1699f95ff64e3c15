"""CLI interface for shac."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from shac import __version__
from shac.builder.document import compile_document, compile_file
from shac.errors import ParseError, SystemFailure
from shac.model.document import CompileResult
from shac.model.options import DEFAULT_ASSET_SUBDIR, CompileOptions

# Process exit codes
EXIT_SUCCESS = 0
EXIT_SYSTEM = 1
EXIT_USAGE = 2
EXIT_PARSER = 3

app = typer.Typer(
    name="shac",
    help="Compile directive-based source documents into static pages with content-addressed assets.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool, debug: bool) -> None:
    if not (verbose or debug):
        return
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("compile")
def compile_(
    source: Annotated[
        Path | None,
        typer.Argument(
            help="Path to source document (omit when using --stdin)",
            dir_okay=False,
        ),
    ] = None,
    stdin: Annotated[
        bool,
        typer.Option("--stdin", "-x", help="Read the source document from stdin"),
    ] = False,
    outdir: Annotated[
        Path,
        typer.Option("--outdir", "-d", help="Output website directory (default: '.')"),
    ] = Path("."),
    assetdir: Annotated[
        str,
        typer.Option("--assetdir", "-a", help="Asset subdirectory name (default: 'assets')"),
    ] = DEFAULT_ASSET_SUBDIR,
    root: Annotated[
        str | None,
        typer.Option("--root", "-r", help="Root URL (default: output directory)"),
    ] = None,
    token_style: Annotated[
        str,
        typer.Option(
            "--token-style",
            help="Asset placeholder grammar: 'bare' (@N@) or 'quoted' (\"@N@\")",
        ),
    ] = "bare",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log each pipeline stage"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log with debug detail"),
    ] = False,
) -> None:
    """
    Compile a source document into the output directory.

    Every @asset is copied into the asset directory under the SHA-1 of its
    contents; @N@ placeholders become asset paths and @$@ becomes the root URL.

    Examples:

        # Compile index.shac into ./site
        shac compile index.shac --outdir site --root https://example.com

        # Read from stdin
        cat about.shac | shac compile --stdin -d site
    """
    if (source is None) == (not stdin):
        typer.echo("Error: provide exactly one of SOURCE or --stdin", err=True)
        raise typer.Exit(EXIT_USAGE)

    try:
        options = CompileOptions.from_cli(
            outdir=outdir, assetdir=assetdir, root=root, token_style=token_style
        )
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(EXIT_USAGE) from exc

    _configure_logging(verbose, debug)

    result: CompileResult | None
    try:
        if source is not None:
            result = compile_file(source, options)
        else:
            result = compile_document(typer.get_binary_stream("stdin"), options)
    except ParseError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_PARSER) from exc
    except SystemFailure as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_SYSTEM) from exc

    if result is None:
        if verbose:
            typer.echo("Skipped: document is marked @ignore")
        return

    if verbose:
        typer.echo(f"Wrote {result.output_path} with {len(result.assets)} asset(s)")
    for index in sorted(set(result.unresolved_indices)):
        typer.echo(f"Warning: placeholder @{index}@ has no matching @asset", err=True)


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"shac version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"shac version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """
    shac - a static HTML asset compiler.

    Reads a source document with an @page/@asset/@html header, stores declared
    assets under content hashes and writes the page with its placeholders
    resolved.

    For detailed usage, run: shac compile --help
    """
    pass


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
