from __future__ import annotations

import io
import json

import pytest

from abi_index import (
    DecoderSettings,
    Event,
    Function,
    MalformedInterfaceError,
    from_str,
    iter_operations,
    load,
    read_source,
)


def test_entries_are_yielded_lazily_in_source_order() -> None:
    source = json.dumps(
        [
            {"type": "function", "name": "a"},
            {"type": "event", "name": "B"},
            {"type": "function", "name": "c"},
            {"type": "bogus"},
        ]
    )
    entries = iter_operations(source)

    assert next(entries) == Function(name="a")
    assert next(entries) == Event(name="B")
    assert next(entries) == Function(name="c")
    with pytest.raises(MalformedInterfaceError, match="entry 3"):
        next(entries)


@pytest.mark.parametrize(
    "source",
    [
        "",
        "[",
        '[{"type": "function", "name": "f"}',
        '{"type": "function", "name": "f"}',
        "[1, 2]",
        '[{"type": 5}]',
        b"\xff\xfe[]",
    ],
)
def test_malformed_sources(source: str | bytes) -> None:
    with pytest.raises(MalformedInterfaceError) as excinfo:
        list(iter_operations(source))
    assert excinfo.value.detail
    assert isinstance(excinfo.value, ValueError)


def test_bytes_are_decoded_with_configured_encoding() -> None:
    settings = DecoderSettings(source_encoding="utf-16")
    source = json.dumps([{"type": "function", "name": "ünïcode"}]).encode("utf-16")
    entries = list(iter_operations(source, settings=settings))
    assert entries == [Function(name="ünïcode")]


def test_source_size_limit() -> None:
    settings = DecoderSettings(max_source_bytes=8)
    with pytest.raises(MalformedInterfaceError, match="exceeds 8 bytes"):
        list(iter_operations('[{"type": "fallback"}]', settings=settings))
    assert list(iter_operations("[]", settings=settings)) == []


def test_read_source_enforces_limit() -> None:
    settings = DecoderSettings(max_source_bytes=4)
    assert read_source(io.BytesIO(b"[]"), settings=settings) == b"[]"
    with pytest.raises(MalformedInterfaceError):
        read_source(io.StringIO("[   ]"), settings=settings)


def test_limit_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ABI_INDEX_MAX_SOURCE_BYTES", "3")
    with pytest.raises(MalformedInterfaceError):
        list(iter_operations("[  ]"))


class _ShortReads(io.RawIOBase):
    """Raw stream that hands back at most ``step`` bytes per read."""

    def __init__(self, payload: bytes, step: int = 4) -> None:
        self._payload = payload
        self._offset = 0
        self._step = step

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # noqa: ANN001
        size = min(len(buffer), self._step, len(self._payload) - self._offset)
        buffer[:size] = self._payload[self._offset : self._offset + size]
        self._offset += size
        return size


@pytest.mark.parametrize("source", ["[" * 100_000, '[{"type": "function", "name": "f", "inputs": ' + "[" * 100_000 + "]"])
def test_deep_nesting_is_malformed(source: str) -> None:
    with pytest.raises(MalformedInterfaceError, match="too deeply"):
        list(iter_operations(source))


def test_deep_nesting_fails_the_build() -> None:
    with pytest.raises(MalformedInterfaceError):
        from_str("[" * 100_000 + "]" * 100_000)


def test_short_reads_are_collected_until_eof() -> None:
    payload = b'[{"type": "fallback"}, {"type": "function", "name": "transfer"}]'
    assert read_source(_ShortReads(payload)) == payload

    index = load(_ShortReads(payload))
    assert index.fallback is True
    assert index.function("transfer").name == "transfer"


def test_short_reads_still_respect_limit() -> None:
    settings = DecoderSettings(max_source_bytes=10)
    with pytest.raises(MalformedInterfaceError, match="exceeds 10 bytes"):
        read_source(_ShortReads(b'[{"type": "fallback"}]', step=3), settings=settings)


def test_empty_streams_keep_their_type() -> None:
    assert read_source(io.StringIO("")) == ""
    assert read_source(io.BytesIO(b"")) == b""
