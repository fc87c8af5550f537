"""Decoding of raw JSON interface descriptions into a lazy stream of entries."""

from __future__ import annotations

import json
import logging
from typing import IO, Any, Iterator

from pydantic import ValidationError

from .errors import MalformedInterfaceError
from .models import OPERATION_ADAPTER, Operation
from .settings import DecoderSettings

logger = logging.getLogger(__name__)


def read_source(stream: IO[str] | IO[bytes], *, settings: DecoderSettings | None = None) -> str | bytes:
    """Read a whole interface description from a text or binary stream.

    Args:
        stream: Any object with a ``read(size)`` method.
        settings: Decoder limits; loaded from the environment when omitted.

    Returns:
        The raw text or bytes, unparsed.

    Raises:
        MalformedInterfaceError: If the stream holds more than ``max_source_bytes``.
    """
    effective = settings if settings is not None else DecoderSettings.from_env()
    limit = effective.max_source_bytes
    chunks: list[Any] = []
    total = 0
    # Raw streams may return short reads; keep going until EOF.
    while True:
        chunk = stream.read(limit + 1 - total)
        if not chunk:
            break
        chunks.append(chunk)
        total += len(chunk)
        if total > limit:
            raise MalformedInterfaceError(f"source exceeds {limit} bytes")
    if not chunks:
        return chunk if chunk is not None else b""
    return chunks[0][:0].join(chunks)


def iter_operations(source: str | bytes, *, settings: DecoderSettings | None = None) -> Iterator[Operation]:
    """Yield one validated entry per element of a JSON array, in source order.

    Nothing is decoded until the first item is requested. Any failure is raised as
    ``MalformedInterfaceError`` at the point it is reached.
    """
    effective = settings if settings is not None else DecoderSettings.from_env()
    if len(source) > effective.max_source_bytes:
        raise MalformedInterfaceError(f"source exceeds {effective.max_source_bytes} bytes")

    try:
        text = source.decode(effective.source_encoding) if isinstance(source, bytes) else source
        document = json.loads(text)
    except UnicodeDecodeError as exc:
        raise MalformedInterfaceError(f"source is not valid {effective.source_encoding}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedInterfaceError(str(exc)) from exc
    except RecursionError as exc:
        raise MalformedInterfaceError("source nests too deeply") from exc

    if not isinstance(document, list):
        raise MalformedInterfaceError(f"expected a JSON array of entries, got {type(document).__name__}")

    logger.debug("decoding %d interface entries", len(document))
    for position, element in enumerate(document):
        try:
            operation = OPERATION_ADAPTER.validate_python(element)
        except ValidationError as exc:
            raise MalformedInterfaceError(f"entry {position}: {exc}") from exc
        except RecursionError as exc:
            raise MalformedInterfaceError(f"entry {position}: nests too deeply") from exc
        yield operation
