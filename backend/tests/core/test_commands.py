"""Ledger Commands — tests for operation-log serialization helpers.

Tests cover:
    - command_to_dict is JSON-safe (no tuples, no Enums) and tagged with kind
    - command_from_dict restores an equal command, so replay is deterministic
    - command_actor reports the issuing identity
"""

import json

from recycle_chain.core.commands import (
    AddProductItems,
    CreateProduct,
    RegisterManufacturer,
    TransitionProductItems,
    command_actor,
    command_from_dict,
    command_kind,
    command_to_dict,
    recycle,
    sell,
)
from recycle_chain.core.domain_types import LifecycleAction


def test_transition_to_dict_is_json_safe():
    data = command_to_dict(sell(["1-1", "1-2"], actor="shop"))
    assert data == {
        "kind": "transition_product_items",
        "action": "sell",
        "item_ids": ["1-1", "1-2"],
        "actor": "shop",
    }
    json.dumps(data)


def test_create_product_restores_tuples():
    command = CreateProduct("M1", "P", ("Lead", "Mercury"), (5, 2))
    restored = command_from_dict(json.loads(json.dumps(command_to_dict(command))))
    assert restored == command


def test_transition_restores_action_enum():
    restored = command_from_dict(command_to_dict(recycle(["3-1"])))
    assert isinstance(restored, TransitionProductItems)
    assert restored.action is LifecycleAction.RECYCLE
    assert restored.item_ids == ("3-1",)


def test_command_kind_names():
    assert command_kind(RegisterManufacturer("M1", "n", "l", "c")) == "register_manufacturer"
    assert command_kind(AddProductItems(1, "M1", 2)) == "add_product_items"


def test_command_actor():
    assert command_actor(AddProductItems(1, "M1", 2)) == "M1"
    assert command_actor(sell(["1-1"])) is None
    assert command_actor(sell(["1-1"], actor="shop")) == "shop"
