from __future__ import annotations


class InterfaceIndexError(Exception):
    """Base class for errors raised while building or querying an interface index."""


class MalformedInterfaceError(InterfaceIndexError, ValueError):
    """The raw interface description could not be decoded into entries."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"malformed interface description: {detail}")
        self.detail = detail


class UnknownNameError(InterfaceIndexError, LookupError):
    """A function or event lookup named something the index does not contain."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown name: {name!r}")
        self.name = name
