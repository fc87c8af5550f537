from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import IO, Any

from .canonical import canonical_sha256
from .decoding import iter_operations, read_source
from .errors import UnknownNameError
from .models import Constructor, Event, Fallback, Function, Operation, Receive
from .settings import DecoderSettings

logger = logging.getLogger(__name__)


def _empty_groups() -> Mapping[str, tuple[Any, ...]]:
    return MappingProxyType({})


@dataclass(frozen=True)
class InterfaceIndex:
    """Immutable, name-indexed view of a contract interface description.

    ``functions`` and ``events`` are read-only mappings with lexicographically
    sorted keys; each value is a non-empty tuple of overloads in source order.
    """

    constructor: Constructor | None = None
    functions: Mapping[str, tuple[Function, ...]] = field(default_factory=_empty_groups)
    events: Mapping[str, tuple[Event, ...]] = field(default_factory=_empty_groups)
    fallback: bool = False
    receive: bool = False

    @classmethod
    def from_str(cls, source: str | bytes, *, settings: DecoderSettings | None = None) -> "InterfaceIndex":
        return from_str(source, settings=settings)

    @classmethod
    def load(cls, stream: IO[str] | IO[bytes], *, settings: DecoderSettings | None = None) -> "InterfaceIndex":
        return load(stream, settings=settings)

    def function(self, name: str) -> Function:
        """Return the function named ``name``, the first one if it is overloaded."""
        return self.functions_by_name(name)[0]

    def event(self, name: str) -> Event:
        """Return the event named ``name``, the first one if there are several."""
        return self.events_by_name(name)[0]

    def functions_by_name(self, name: str) -> tuple[Function, ...]:
        try:
            return self.functions[name]
        except KeyError:
            raise UnknownNameError(name) from None

    def events_by_name(self, name: str) -> tuple[Event, ...]:
        try:
            return self.events[name]
        except KeyError:
            raise UnknownNameError(name) from None

    def has_function(self, name: str) -> bool:
        return name in self.functions

    def has_event(self, name: str) -> bool:
        return name in self.events

    def function_names(self) -> tuple[str, ...]:
        return tuple(self.functions)

    def event_names(self) -> tuple[str, ...]:
        return tuple(self.events)

    def iter_functions(self) -> Iterator[Function]:
        """Iterate over all functions. Order across names is unspecified."""
        for group in self.functions.values():
            yield from group

    def iter_events(self) -> Iterator[Event]:
        """Iterate over all events. Order across names is unspecified."""
        for group in self.events.values():
            yield from group

    def to_json_dict(self) -> dict[str, Any]:
        return {
            "constructor": (
                self.constructor.model_dump(mode="json", by_alias=True, exclude_none=True)
                if self.constructor is not None
                else None
            ),
            "functions": {
                name: [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in group]
                for name, group in self.functions.items()
            },
            "events": {
                name: [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in group]
                for name, group in self.events.items()
            },
            "fallback": self.fallback,
            "receive": self.receive,
        }

    @property
    def fingerprint(self) -> str:
        return canonical_sha256(self.to_json_dict())


class InterfaceIndexBuilder:
    """Folds interface entries, in order, into an ``InterfaceIndex``.

    A later constructor silently replaces an earlier one. Functions and events are
    grouped by name with overloads kept in the order they were added. Not thread-safe.
    """

    def __init__(self) -> None:
        self._constructor: Constructor | None = None
        self._functions: dict[str, list[Function]] = {}
        self._events: dict[str, list[Event]] = {}
        self._fallback = False
        self._receive = False

    def add(self, entry: Operation) -> None:
        match entry:
            case Constructor():
                self._constructor = entry
            case Function(name=name):
                self._functions.setdefault(name, []).append(entry)
            case Event(name=name):
                self._events.setdefault(name, []).append(entry)
            case Fallback():
                self._fallback = True
            case Receive():
                self._receive = True
            case _:
                raise TypeError(f"not an interface entry: {type(entry).__name__}")

    def extend(self, entries: Iterable[Operation]) -> "InterfaceIndexBuilder":
        for entry in entries:
            self.add(entry)
        return self

    def build(self) -> InterfaceIndex:
        functions = {name: tuple(group) for name, group in sorted(self._functions.items())}
        events = {name: tuple(group) for name, group in sorted(self._events.items())}
        logger.debug(
            "built interface index: %d function names (%d entries), %d event names (%d entries)",
            len(functions),
            sum(len(group) for group in functions.values()),
            len(events),
            sum(len(group) for group in events.values()),
        )
        return InterfaceIndex(
            constructor=self._constructor,
            functions=MappingProxyType(functions),
            events=MappingProxyType(events),
            fallback=self._fallback,
            receive=self._receive,
        )


def build_index(entries: Iterable[Operation]) -> InterfaceIndex:
    """Build an index from a complete entry sequence; nothing is returned if it fails."""
    return InterfaceIndexBuilder().extend(entries).build()


def from_str(source: str | bytes, *, settings: DecoderSettings | None = None) -> InterfaceIndex:
    """Load an interface index from JSON text.

    Raises:
        MalformedInterfaceError: If the text is not a valid interface description.
    """
    return build_index(iter_operations(source, settings=settings))


def load(stream: IO[str] | IO[bytes], *, settings: DecoderSettings | None = None) -> InterfaceIndex:
    """Load an interface index from a readable text or binary stream."""
    effective = settings if settings is not None else DecoderSettings.from_env()
    return from_str(read_source(stream, settings=effective), settings=effective)
