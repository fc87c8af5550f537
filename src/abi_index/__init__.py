from importlib.metadata import version

from .canonical import to_canonical_json
from .decoding import iter_operations, read_source
from .errors import InterfaceIndexError, MalformedInterfaceError, UnknownNameError
from .index import InterfaceIndex, InterfaceIndexBuilder, build_index, from_str, load
from .models import (
    Constructor,
    Event,
    EventParam,
    Fallback,
    Function,
    Operation,
    Param,
    Receive,
    StateMutability,
)
from .settings import DecoderSettings


def get_version() -> str:
    try:
        return version("abi-index")
    except Exception:
        return "0.0.0"


__all__ = [
    "Constructor",
    "DecoderSettings",
    "Event",
    "EventParam",
    "Fallback",
    "Function",
    "InterfaceIndex",
    "InterfaceIndexBuilder",
    "InterfaceIndexError",
    "MalformedInterfaceError",
    "Operation",
    "Param",
    "Receive",
    "StateMutability",
    "UnknownNameError",
    "build_index",
    "from_str",
    "get_version",
    "iter_operations",
    "load",
    "read_source",
    "to_canonical_json",
]
