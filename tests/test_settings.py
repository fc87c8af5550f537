from __future__ import annotations

import pytest

from abi_index.settings import DecoderSettings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ABI_INDEX_MAX_SOURCE_BYTES", raising=False)
    monkeypatch.delenv("ABI_INDEX_SOURCE_ENCODING", raising=False)
    settings = DecoderSettings.from_env()
    assert settings.max_source_bytes == 16 * 1024 * 1024
    assert settings.source_encoding == "utf-8"


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ABI_INDEX_MAX_SOURCE_BYTES", "4096")
    monkeypatch.setenv("ABI_INDEX_SOURCE_ENCODING", " Latin-1 ")
    settings = DecoderSettings.from_env()
    assert settings.max_source_bytes == 4096
    assert settings.source_encoding == "latin-1"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("ABI_INDEX_MAX_SOURCE_BYTES", "abc"),
        ("ABI_INDEX_MAX_SOURCE_BYTES", "1"),
        ("ABI_INDEX_SOURCE_ENCODING", "not-a-codec"),
        ("ABI_INDEX_SOURCE_ENCODING", "hex"),
        ("ABI_INDEX_SOURCE_ENCODING", "rot13"),
        ("ABI_INDEX_SOURCE_ENCODING", "   "),
    ],
)
def test_invalid_env_raises(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        DecoderSettings.from_env()
