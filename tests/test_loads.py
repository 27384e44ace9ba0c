"""Document loading tests."""

import io
from datetime import datetime, timezone
from pathlib import Path

import pytest

import plisttree
from plisttree import (
    Array,
    DecodeError,
    Dictionary,
    DocumentError,
    Integer,
    IntegerWidth,
    String,
    StructuralError,
)

CATALOG = b"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<array>
    <dict>
        <key>ProductType</key>
        <string>iPhone15,2</string>
        <key>Channel</key>
        <string>release</string>
        <key>Size</key>
        <integer>6442450944</integer>
        <key>Posted</key>
        <date>2024-03-05T18:00:00Z</date>
        <key>Digest</key>
        <data>
        aGVsbG8=
        </data>
    </dict>
    <dict>
        <key>ProductType</key>
        <string>iPhone15,2</string>
        <key>Channel</key>
        <string>beta</string>
        <key>Size</key>
        <integer>1024</integer>
        <key>Posted</key>
        <date>2024-03-01T18:00:00Z</date>
        <key>Digest</key>
        <data></data>
    </dict>
</array>
</plist>
"""


def test_loads() -> None:
    """Test decoding of a whole document."""
    value = plisttree.loads(CATALOG)

    assert isinstance(value, Array)
    assert len(value) == 2

    first = value[0]
    assert isinstance(first, Dictionary)
    assert list(first) == ["ProductType", "Channel", "Size", "Posted", "Digest"]
    assert first["Size"] == Integer(6442450944, IntegerWidth.INT64)
    assert first["Posted"].value == datetime(2024, 3, 5, 18, tzinfo=timezone.utc)
    assert first["Digest"].value == b"hello"
    assert value[1]["Size"] == Integer(1024, IntegerWidth.INT32)


def test_records_can_be_filtered() -> None:
    """Test that decoded records can be matched on their fields."""
    value = plisttree.loads(CATALOG)

    matches = [
        record
        for record in value
        if record["ProductType"] == String("iPhone15,2") and record["Channel"] != String("beta")
    ]

    assert len(matches) == 1
    assert matches[0]["Channel"] == String("release")


def test_loads_text() -> None:
    """Test decoding of a document given as text."""
    assert plisttree.loads("<plist><string>hi</string></plist>") == String("hi")


def test_loads_namespaced_root() -> None:
    """Test that a namespaced root is accepted."""
    doc = b'<p:plist xmlns:p="urn:example"><p:true/></p:plist>'

    assert plisttree.loads(doc).value is True


@pytest.mark.parametrize(
    "doc",
    [
        b"<plist><dict></plist>",
        b"",
        b"not xml at all",
    ],
)
def test_loads_malformed(doc: bytes) -> None:
    """Test that malformed XML raises DocumentError."""
    with pytest.raises(DocumentError):
        plisttree.loads(doc)


def test_loads_rejects_entities() -> None:
    """Test that documents declaring entities are refused."""
    doc = (
        b'<?xml version="1.0"?>'
        b'<!DOCTYPE plist [<!ENTITY a "aaaaaaaaaa">]>'
        b"<plist><string>&a;&a;</string></plist>"
    )

    with pytest.raises(DocumentError, match="unsafe"):
        plisttree.loads(doc)


def test_loads_not_a_plist() -> None:
    """Test that well-formed XML with another root is rejected."""
    with pytest.raises(StructuralError):
        plisttree.loads(b"<html><body/></html>")


def test_loads_max_depth() -> None:
    """Test that the depth limit can be configured."""
    doc = b"<plist><array><array><true/></array></array></plist>"

    assert len(plisttree.loads(doc, max_depth=2)) == 1
    with pytest.raises(StructuralError):
        plisttree.loads(doc, max_depth=1)


def test_errors_share_base() -> None:
    """Test that all decoder errors derive from DecodeError."""
    for doc in (
        b"<plist>",
        b"<plist><foo/></plist>",
        b"<plist><integer>x</integer></plist>",
        b"<plist><integer>" + b"1" * 5000 + b"</integer></plist>",
    ):
        with pytest.raises(DecodeError):
            plisttree.loads(doc)


def test_load_path(tmp_path: Path) -> None:
    """Test loading a document from a path."""
    path = tmp_path / "catalog.plist"
    path.write_bytes(CATALOG)

    assert plisttree.load(path) == plisttree.loads(CATALOG)
    assert plisttree.load(str(path)) == plisttree.loads(CATALOG)


def test_load_stream() -> None:
    """Test loading a document from a binary stream."""
    assert plisttree.load(io.BytesIO(CATALOG)) == plisttree.loads(CATALOG)


def test_load_bytes() -> None:
    """Test that raw bytes are decoded directly."""
    assert plisttree.load(b"<plist><array/></plist>") == Array()


def test_load_unsupported_source() -> None:
    """Test that unsupported sources are refused."""
    with pytest.raises(TypeError):
        plisttree.load(42)  # type: ignore[arg-type]
