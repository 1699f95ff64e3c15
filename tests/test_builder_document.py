from __future__ import annotations

import hashlib
import io
import logging
import os
import sys
from pathlib import Path

import pytest

from shac.builder.document import compile_document, compile_file
from shac.errors import (
    AssetReadError,
    HeaderSyntaxError,
    OutputWriteError,
    PrematureEndOfInput,
    SourceOpenError,
    SourceReadError,
)
from shac.model.options import CompileOptions, TokenStyle


def _doc(text: str | bytes) -> io.BytesIO:
    return io.BytesIO(text.encode("utf-8") if isinstance(text, str) else text)


def test_end_to_end_scenario(
    tmp_path: Path, write_asset, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_asset("logo.png", b"PNG")
    monkeypatch.setattr("shac.ingest.asset_store.compute_content_id", lambda data: "deadbeef")
    out = tmp_path / "out"
    options = CompileOptions(output_dir=out, root_url="/site")

    result = compile_document(
        _doc('@page Home\n@asset logo.png\n@html\n<img src="@0@">@$@ suffix'),
        options,
        base_dir=tmp_path,
    )

    assert result is not None
    assert result.output_path == out / "Home"
    assert (out / "Home").read_bytes() == b'<img src="assets/deadbeef">/site suffix'
    assert (out / "assets" / "deadbeef").read_bytes() == b"PNG"
    assert [a.asset_id for a in result.assets] == ["deadbeef"]
    assert result.unresolved_indices == []


def test_assets_are_content_addressed(tmp_path: Path, write_asset) -> None:
    write_asset("a.css", b"a{}")
    write_asset("copy.css", b"a{}")
    write_asset("b.js", b"let b")
    out = tmp_path / "out"

    result = compile_document(
        _doc("@page index.html\n@asset a.css\n@asset b.js\n@asset copy.css\n@html\n@0@|@1@|@2@"),
        CompileOptions(output_dir=out),
        base_dir=tmp_path,
    )

    css = hashlib.sha1(b"a{}").hexdigest()
    js = hashlib.sha1(b"let b").hexdigest()
    assert result is not None
    assert [a.index for a in result.assets] == [0, 1, 2]
    assert (out / "index.html").read_text() == f"assets/{css}|assets/{js}|assets/{css}"
    assert sorted(p.name for p in (out / "assets").iterdir()) == sorted({css, js})


def test_root_defaults_to_output_dir(tmp_path: Path) -> None:
    out = tmp_path / "public"
    compile_document(_doc("@page p\n@html\n<a href='@$@/x'>"), CompileOptions(output_dir=out))
    assert (out / "p").read_text() == f"<a href='{out}/x'>"


def test_out_of_range_placeholder_is_reported_not_fatal(
    tmp_path: Path, write_asset, caplog: pytest.LogCaptureFixture
) -> None:
    write_asset("one", b"1")
    write_asset("two", b"2")
    out = tmp_path / "out"

    with caplog.at_level(logging.WARNING, logger="shac"):
        result = compile_document(
            _doc('@page p\n@asset one\n@asset two\n@html\n"@5@" @1@'),
            CompileOptions(output_dir=out, root_url="/"),
            base_dir=tmp_path,
        )

    assert result is not None
    assert result.unresolved_indices == [5]
    text = (out / "p").read_text()
    assert '"@5@"' in text
    assert f"assets/{hashlib.sha1(b'2').hexdigest()}" in text
    assert "left unchanged" in caplog.text


def test_quoted_token_style(tmp_path: Path, write_asset) -> None:
    write_asset("x", b"x")
    out = tmp_path / "out"
    compile_document(
        _doc('@page p\n@asset x\n@html\n<img src="@0@"> @0@'),
        CompileOptions(output_dir=out, token_style=TokenStyle.QUOTED, asset_subdir="static"),
        base_dir=tmp_path,
    )
    digest = hashlib.sha1(b"x").hexdigest()
    assert (out / "p").read_text() == f'<img src="static/{digest}"> @0@'


def test_ignore_produces_nothing(tmp_path: Path) -> None:
    out = tmp_path / "out"
    result = compile_document(_doc("@ignore\n@page Home\n@html\nbody"), CompileOptions(output_dir=out))
    assert result is None
    assert not out.exists()


def test_missing_body_marker_writes_nothing(tmp_path: Path, write_asset) -> None:
    write_asset("logo.png", b"PNG")
    out = tmp_path / "out"
    with pytest.raises(PrematureEndOfInput):
        compile_document(
            _doc("@page Home\n@asset logo.png\n"),
            CompileOptions(output_dir=out),
            base_dir=tmp_path,
        )
    assert not out.exists()


def test_syntax_error_happens_before_asset_io(tmp_path: Path) -> None:
    out = tmp_path / "out"
    # The declared asset does not exist; the syntax error must win
    with pytest.raises(HeaderSyntaxError):
        compile_document(
            _doc("@page Home\n@asset missing.png\n@script x.js\n@html\n"),
            CompileOptions(output_dir=out),
            base_dir=tmp_path,
        )
    assert not out.exists()


def test_missing_asset_aborts_without_output_document(tmp_path: Path, write_asset) -> None:
    write_asset("ok.png", b"ok")
    out = tmp_path / "out"
    with pytest.raises(AssetReadError):
        compile_document(
            _doc("@page Home\n@asset ok.png\n@asset gone.png\n@html\n@0@"),
            CompileOptions(output_dir=out),
            base_dir=tmp_path,
        )
    assert not (out / "Home").exists()
    # Assets stored before the failure are kept
    assert (out / "assets" / hashlib.sha1(b"ok").hexdigest()).exists()


def test_output_write_failure(tmp_path: Path) -> None:
    out = tmp_path / "out"
    with pytest.raises(OutputWriteError):
        compile_document(_doc("@page nested/Home\n@html\n"), CompileOptions(output_dir=out))


def test_recompile_is_idempotent(tmp_path: Path, write_asset) -> None:
    write_asset("a.png", b"A")
    out = tmp_path / "out"
    source = "@page p\n@asset a.png\n@html\n<img src=@0@> @$@"
    options = CompileOptions(output_dir=out, root_url="https://x.test")

    compile_document(_doc(source), options, base_dir=tmp_path)
    first = {p.relative_to(out): p.read_bytes() for p in out.rglob("*") if p.is_file()}
    compile_document(_doc(source), options, base_dir=tmp_path)
    second = {p.relative_to(out): p.read_bytes() for p in out.rglob("*") if p.is_file()}

    assert first == second


def test_compile_file_resolves_assets_from_working_directory(
    tmp_path: Path, write_asset, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_asset("img/a.png", b"A")
    source = write_asset("pages/index.shac", b"@page index.html\n@asset img/a.png\n@html\n@0@")
    monkeypatch.chdir(tmp_path)

    result = compile_file(source, CompileOptions(output_dir=Path("site")))

    assert result is not None
    assert (tmp_path / "site" / "index.html").read_text() == (
        f"assets/{hashlib.sha1(b'A').hexdigest()}"
    )


def test_compile_file_missing_source(tmp_path: Path) -> None:
    with pytest.raises(SourceOpenError) as excinfo:
        compile_file(tmp_path / "nope.shac", CompileOptions(output_dir=tmp_path))
    assert excinfo.value.path == tmp_path / "nope.shac"


class _UnreadableStream:
    name = "/mnt/flaky/index.shac"

    def __init__(self, header: bytes = b"") -> None:
        self._lines = io.BytesIO(header)

    def readline(self) -> bytes:
        line = self._lines.readline()
        if not line:
            raise OSError(5, "Input/output error")
        return line

    def read(self) -> bytes:
        raise OSError(5, "Input/output error")


@pytest.mark.parametrize("header", [b"", b"@page Home\n"])
def test_header_read_failure_is_source_read_error(tmp_path: Path, header: bytes) -> None:
    out = tmp_path / "out"
    with pytest.raises(SourceReadError) as excinfo:
        compile_document(_UnreadableStream(header), CompileOptions(output_dir=out))
    assert excinfo.value.path == Path("/mnt/flaky/index.shac")
    assert isinstance(excinfo.value.cause, OSError)
    assert not out.exists()


def test_body_read_failure_is_source_read_error(tmp_path: Path) -> None:
    out = tmp_path / "out"
    with pytest.raises(SourceReadError, match="failed to read source file"):
        compile_document(_UnreadableStream(b"@page Home\n@html\n"), CompileOptions(output_dir=out))
    assert not (out / "Home").exists()


@pytest.mark.skipif(sys.platform == "win32", reason="undecodable paths are POSIX only")
def test_undecodable_output_dir_as_default_root(tmp_path: Path) -> None:
    out = Path(os.fsdecode(os.fsencode(tmp_path) + b"/caf\xe9"))
    compile_document(_doc("@page p\n@html\n@$@/x"), CompileOptions(output_dir=out))
    assert (out / "p").read_bytes() == os.fsencode(tmp_path) + b"/caf\xe9/x"
