from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_SOURCE_BYTES = 16 * 1024 * 1024


@dataclass(frozen=True)
class DecoderSettings:
    """Limits applied when decoding an interface description, read from ``ABI_INDEX_*``."""

    max_source_bytes: int = DEFAULT_MAX_SOURCE_BYTES
    source_encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> "DecoderSettings":
        return cls(
            max_source_bytes=_env_size("ABI_INDEX_MAX_SOURCE_BYTES", DEFAULT_MAX_SOURCE_BYTES),
            source_encoding=os.getenv("ABI_INDEX_SOURCE_ENCODING", "utf-8"),
        ).normalized()

    def normalized(self) -> "DecoderSettings":
        """Return a validated copy. Raises ValueError on invalid configuration."""
        if self.max_source_bytes < 2:
            raise ValueError(f"ABI_INDEX_MAX_SOURCE_BYTES must be >= 2, got: {self.max_source_bytes}")

        encoding = self.source_encoding.strip().lower()
        if not encoding:
            raise ValueError("ABI_INDEX_SOURCE_ENCODING must be non-empty")
        # bytes.decode only accepts text encodings; hex, base64 and rot13 fail here too.
        try:
            b"".decode(encoding)
        except LookupError as exc:
            raise ValueError(
                f"ABI_INDEX_SOURCE_ENCODING is not a text encoding: {self.source_encoding!r}"
            ) from exc

        return DecoderSettings(max_source_bytes=self.max_source_bytes, source_encoding=encoding)


def _env_size(name: str, default: int) -> int:
    """Read a byte count from ``name``; unset means ``default``."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got: {raw!r}") from exc
