"""CLI tests for the inspect command."""

import json
import sys

import pytest

from vsixproc import cli


def _run_cli(args, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["vsixproc"] + args)
    return cli.main()


def test_inspect_prints_summary(basic_vsix, tmp_path, monkeypatch, capsys):
    package = tmp_path / "hello.vsix"
    package.write_bytes(basic_vsix)
    _run_cli(["inspect", str(package)], monkeypatch)
    summary = json.loads(capsys.readouterr().out)
    assert summary["metadata"]["namespace"] == "acme"
    assert [r["kind"] for r in summary["resources"]][:2] == ["download", "manifest"]


def test_inspect_quiet_prints_nothing(basic_vsix, tmp_path, monkeypatch, capsys):
    package = tmp_path / "hello.vsix"
    package.write_bytes(basic_vsix)
    _run_cli(["inspect", str(package), "--quiet"], monkeypatch)
    assert capsys.readouterr().out == ""


def test_inspect_writes_output_dir(make_vsix, tmp_path, monkeypatch, capsys):
    data = make_vsix(
        {"extension/README.md": "# Web", "extension/dist/app.js": "x"},
        manifest={"name": "w", "publisher": "acme", "version": "2.0.0", "extensionKind": ["web"]},
    )
    package = tmp_path / "w.vsix"
    package.write_bytes(data)
    out_dir = tmp_path / "out"

    _run_cli(["inspect", str(package), "--web", "--output-dir", str(out_dir)], monkeypatch)

    out = capsys.readouterr().out
    assert "[OK] Extraction complete" in out
    assert (out_dir / "summary.json").exists()
    assert (out_dir / "acme.w-2.0.0.vsix").read_bytes() == data
    assert (out_dir / "manifest" / "package.json").exists()
    assert (out_dir / "readme" / "README.md").read_text(encoding="utf-8") == "# Web"
    assert (out_dir / "web" / "extension" / "dist" / "app.js").read_text(encoding="utf-8") == "x"


def test_inspect_skips_paths_escaping_output_dir(make_vsix, tmp_path, monkeypatch, capsys):
    data = make_vsix(
        {"extension/../../../../evil.js": "x"},
        manifest={"name": "w", "publisher": "acme", "extensionKind": ["web"]},
    )
    package = tmp_path / "w.vsix"
    package.write_bytes(data)
    out_dir = tmp_path / "nested" / "out"

    _run_cli(["inspect", str(package), "--web", "--output-dir", str(out_dir)], monkeypatch)

    assert "skipped (unsafe path): 1" in capsys.readouterr().out
    assert not (tmp_path / "evil.js").exists()


def test_inspect_reports_ingest_error(make_vsix, tmp_path, monkeypatch, capsys):
    package = tmp_path / "bad.vsix"
    package.write_bytes(make_vsix({"extension/README.md": "x"}))
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["inspect", str(package)], monkeypatch)
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "MANIFEST_MISSING" in err
    assert "Entry not found: extension/package.json" in err


def test_inspect_size_limit(basic_vsix, tmp_path, monkeypatch, capsys):
    package = tmp_path / "big.vsix"
    package.write_bytes(basic_vsix + b"\0" * (1024 * 1024))
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["inspect", str(package), "--max-size-mb", "1"], monkeypatch)
    assert excinfo.value.code == 1
    assert "PAYLOAD_TOO_LARGE" in capsys.readouterr().err


def test_inspect_missing_file(tmp_path, monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli(["inspect", str(tmp_path / "nope.vsix")], monkeypatch)
    assert excinfo.value.code == 1
    assert "Package not found" in capsys.readouterr().err


def test_no_command_prints_help(monkeypatch, capsys):
    with pytest.raises(SystemExit) as excinfo:
        _run_cli([], monkeypatch)
    assert excinfo.value.code == 1
