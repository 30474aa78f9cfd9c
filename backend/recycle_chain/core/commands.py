"""Ledger Commands — one frozen dataclass per mutating operation.

Invariants:
    - Commands are plain data; validation lives in enforce_* and lifecycle
    - command_to_dict produces a JSON-safe dict; command_from_dict reverses it
    - The "kind" key identifies the command type in the operation log

Design Decisions:
    - Commands double as the persisted operation log: replaying them through
      ledger.apply rebuilds state and events deterministically
    - Transition commands carry the actor for audit only; it is never checked
"""

from dataclasses import asdict, dataclass, field
from typing import Union

from recycle_chain.core.domain_types import LifecycleAction


@dataclass(frozen=True)
class RegisterManufacturer:
    identity: str
    name: str
    location: str
    contact: str


@dataclass(frozen=True)
class CreateProduct:
    identity: str
    name: str
    toxic_names: tuple[str, ...] = ()
    toxic_weights: tuple[int, ...] = ()


@dataclass(frozen=True)
class AddProductItems:
    product_id: int
    identity: str
    count: int


@dataclass(frozen=True)
class TransitionProductItems:
    action: LifecycleAction
    item_ids: tuple[str, ...] = field(default_factory=tuple)
    actor: str | None = None


Command = Union[
    RegisterManufacturer, CreateProduct, AddProductItems, TransitionProductItems,
]

_KINDS: dict[str, type] = {
    "register_manufacturer": RegisterManufacturer,
    "create_product": CreateProduct,
    "add_product_items": AddProductItems,
    "transition_product_items": TransitionProductItems,
}
_KIND_BY_TYPE: dict[type, str] = {v: k for k, v in _KINDS.items()}


def sell(item_ids: list[str], actor: str | None = None) -> TransitionProductItems:
    return TransitionProductItems(LifecycleAction.SELL, tuple(item_ids), actor)


def return_(item_ids: list[str], actor: str | None = None) -> TransitionProductItems:
    return TransitionProductItems(LifecycleAction.RETURN, tuple(item_ids), actor)


def recycle(item_ids: list[str], actor: str | None = None) -> TransitionProductItems:
    return TransitionProductItems(LifecycleAction.RECYCLE, tuple(item_ids), actor)


def command_kind(command: Command) -> str:
    return _KIND_BY_TYPE[type(command)]


def command_actor(command: Command) -> str | None:
    """Identity that issued the command, if any."""
    if isinstance(command, TransitionProductItems):
        return command.actor
    return command.identity


def command_to_dict(command: Command) -> dict:
    """Serialize to JSON-safe dict. Tuples become lists, Enums their values."""
    data = asdict(command)
    for key, value in data.items():
        if isinstance(value, tuple):
            data[key] = list(value)
        elif isinstance(value, LifecycleAction):
            data[key] = value.value
    data["kind"] = command_kind(command)
    return data


def command_from_dict(data: dict) -> Command:
    """Rebuild a command from command_to_dict output."""
    payload = dict(data)
    kind = payload.pop("kind")
    cls = _KINDS[kind]
    if cls is CreateProduct:
        payload["toxic_names"] = tuple(payload.get("toxic_names", ()))
        payload["toxic_weights"] = tuple(payload.get("toxic_weights", ()))
    elif cls is TransitionProductItems:
        payload["action"] = LifecycleAction(payload["action"])
        payload["item_ids"] = tuple(payload.get("item_ids", ()))
    return cls(**payload)
