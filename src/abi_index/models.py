from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter, model_validator


class StateMutability(str, Enum):
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"


def _derive_state_mutability(data: Any) -> Any:
    """Fill ``stateMutability`` from the pre-0.4.16 ``payable``/``constant`` flags."""
    if not isinstance(data, dict) or "stateMutability" in data or "state_mutability" in data:
        return data
    if data.get("payable"):
        mutability = StateMutability.PAYABLE
    elif data.get("constant"):
        mutability = StateMutability.VIEW
    else:
        mutability = StateMutability.NONPAYABLE
    return {**data, "stateMutability": mutability.value}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Param(_Frozen):
    """One input or output of a constructor or function."""

    name: str = ""
    type: str
    internal_type: str | None = Field(default=None, alias="internalType")
    components: tuple[Param, ...] = ()


class EventParam(Param):
    indexed: bool = False


class Constructor(_Frozen):
    type: Literal["constructor"] = "constructor"
    inputs: tuple[Param, ...] = ()
    state_mutability: StateMutability = Field(default=StateMutability.NONPAYABLE, alias="stateMutability")

    @model_validator(mode="before")
    @classmethod
    def fill_legacy_state_mutability(cls, data: Any) -> Any:
        return _derive_state_mutability(data)


class Function(_Frozen):
    """A callable entry point. Overloads share ``name``; the name is not validated."""

    type: Literal["function"] = "function"
    name: str
    inputs: tuple[Param, ...] = ()
    outputs: tuple[Param, ...] = ()
    state_mutability: StateMutability = Field(default=StateMutability.NONPAYABLE, alias="stateMutability")
    constant: bool | None = None

    @model_validator(mode="before")
    @classmethod
    def fill_legacy_state_mutability(cls, data: Any) -> Any:
        return _derive_state_mutability(data)


class Event(_Frozen):
    type: Literal["event"] = "event"
    name: str
    inputs: tuple[EventParam, ...] = ()
    anonymous: bool = False


class Fallback(_Frozen):
    type: Literal["fallback"] = "fallback"
    state_mutability: str | None = Field(default=None, alias="stateMutability")


class Receive(_Frozen):
    type: Literal["receive"] = "receive"
    state_mutability: str | None = Field(default=None, alias="stateMutability")


def _operation_tag(value: Any) -> str | None:
    # Entries without a "type" key are functions.
    if isinstance(value, dict):
        tag = value.get("type", "function")
        return tag if isinstance(tag, str) else None
    return getattr(value, "type", None)


Operation = Annotated[
    Union[
        Annotated[Constructor, Tag("constructor")],
        Annotated[Function, Tag("function")],
        Annotated[Event, Tag("event")],
        Annotated[Fallback, Tag("fallback")],
        Annotated[Receive, Tag("receive")],
    ],
    Discriminator(_operation_tag),
]

OPERATION_ADAPTER: TypeAdapter[Operation] = TypeAdapter(Operation)
