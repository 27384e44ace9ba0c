"""Command line tests."""

import json
from pathlib import Path

import pytest

from plisttree.__main__ import main

DOC = b"""<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0">
<dict>
    <key>CFBundleIdentifier</key>
    <string>com.example.app</string>
    <key>Icon</key>
    <data>AP8=</data>
</dict>
</plist>
"""


def test_decode_stdout(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that the decode command prints JSON."""
    src = tmp_path / "Info.plist"
    src.write_bytes(DOC)

    assert main(["decode", str(src)]) == 0

    out = json.loads(capsys.readouterr().out)
    assert out == {"CFBundleIdentifier": "com.example.app", "Icon": "AP8="}


def test_decode_out_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that the decode command writes to --out."""
    src = tmp_path / "Info.plist"
    src.write_bytes(DOC)
    dst = tmp_path / "Info.json"

    assert main(["decode", str(src), "--out", str(dst)]) == 0

    assert capsys.readouterr().out == ""
    assert json.loads(dst.read_text(encoding="utf-8"))["Icon"] == "AP8="


def test_decode_invalid(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Test that decode errors are reported with a non-zero exit status."""
    src = tmp_path / "broken.plist"
    src.write_bytes(b"<plist><dict><key>orphan</key></dict></plist>")

    assert main(["decode", str(src)]) == 1
    assert "dictionary property value missing" in caplog.text


def test_decode_missing_file(tmp_path: Path) -> None:
    """Test that unreadable files are reported with a non-zero exit status."""
    assert main(["decode", str(tmp_path / "missing.plist")]) == 1
