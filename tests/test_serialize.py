"""
Tests for to_plain(): stored names, naming case, ignore and transform
policies, and propagation of the enclosing model through nested values.
"""

import json
import sys
import os
from typing import Any, Dict, List, Optional

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from plainmodel import (
    BaseModel, Field, Ignore, ModelConfig, NamingCase, TransformType,
)


# ============================================================
# Models
# ============================================================

class User(BaseModel):
    id: int
    full_name: str = Field(name="fullName")


class LineItem(BaseModel):
    sku_code: str = Field(name="SKU")
    internal_note: str = Field(default="", ignore=True)
    unit_price: float = 0.0


class Order(BaseModel):
    model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

    order_id: int
    line_items: List[LineItem] = Field(default_factory=list)
    shipping_address: Optional['Address'] = None


class Address(BaseModel):
    street_name: str = ""
    postal_code: str = Field(default="", name="ZIP")


Order.rebuild()


class Cell(BaseModel):
    cell_value: int = 0
    cell_label: str = Field(default="", name="label")


class Grid(BaseModel):
    model_config = ModelConfig(rename=NamingCase.KEBAB_CASE)

    grid_name: str = ""
    rows: List[List[Cell]] = Field(default_factory=list)


class Profile(BaseModel):
    model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

    display_name: str = ""
    extra_data: Dict[str, Any] = Field(default_factory=dict)


class RawRecord(BaseModel):
    model_config = ModelConfig(rename=NamingCase.NON_CASE)

    some_key: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)


def wrap_transform(value, direction):
    if value is None:
        return value
    if direction is TransformType.TO_PLAIN:
        return {"wrapped_value": value}
    if direction is TransformType.TO_MODEL:
        return value["wrapped_value"]
    return value


class Wrapped(BaseModel):
    model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

    plain_field: int = 0
    wrapped_field: Optional[int] = Field(default=None, transform=wrap_transform)


# ============================================================
# Test: Basic serialization
# ============================================================

class TestBasicSerialization:

    def test_user_example(self):
        """Stored name replaces the logical key; other keys stay as-is."""
        user = User(id=1, full_name="Ann")
        assert user.to_plain() == {"id": 1, "fullName": "Ann"}

    def test_key_order_follows_declaration(self):
        user = User(id=1, full_name="Ann")
        assert list(user.to_plain()) == ["id", "fullName"]

    def test_model_rename_applies_to_unconfigured_keys(self):
        order = Order(order_id=7)
        assert order.to_plain() == {"orderId": 7, "lineItems": [], "shippingAddress": None}

    def test_none_values_pass_through(self):
        assert User(id=None, full_name=None).to_plain() == {"id": None, "fullName": None}

    def test_to_json(self):
        user = User(id=1, full_name="Ann")
        assert json.loads(user.to_json()) == {"id": 1, "fullName": "Ann"}

    def test_to_json_indent(self):
        assert "\n" in User(id=1, full_name="Ann").to_json(indent=2)


# ============================================================
# Test: Ignore precedence
# ============================================================

class TestIgnore:

    def test_ignored_field_never_serialized(self):
        item = LineItem(sku_code="A-1", internal_note="secret", unit_price=2.5)
        plain = item.to_plain()
        assert "internal_note" not in plain
        assert "internalNote" not in plain

    def test_ignore_serialize_only(self):
        class Login(BaseModel):
            username: str = ""
            password: str = Field(default="", ignore=Ignore.SERIALIZE)

        assert Login(username="ann", password="pw").to_plain() == {"username": "ann"}

    def test_ignore_deserialize_only_still_serialized(self):
        class Stamp(BaseModel):
            created_by: str = Field(default="", ignore=Ignore.DESERIALIZE)

        assert Stamp(created_by="system").to_plain() == {"created_by": "system"}

    def test_ignore_wins_over_transform(self):
        def shout(value, direction):
            return value.upper() if direction is TransformType.TO_PLAIN else value

        class Secret(BaseModel):
            visible: str = ""
            token: str = Field(default="", ignore=True, transform=shout)

        assert Secret(visible="v", token="t").to_plain() == {"visible": "v"}


# ============================================================
# Test: Rename stability
# ============================================================

class TestRenameStability:

    def test_stored_name_not_case_converted(self):
        """A stored name is emitted byte-for-byte even under a model rename."""
        class Account(BaseModel):
            model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

            account_id: int = 0
            legacy_code: str = Field(default="", name="LEGACY_code")

        plain = Account(account_id=3, legacy_code="x").to_plain()
        assert plain == {"accountId": 3, "LEGACY_code": "x"}

    def test_stored_name_in_snake_form_under_camel_model(self):
        class Person(BaseModel):
            model_config = ModelConfig(rename=NamingCase.CAMEL_CASE)

            first_name: str = ""
            last_name: str = Field(default="", name="last_name")

        plain = Person(first_name="A", last_name="B").to_plain()
        assert plain == {"firstName": "A", "last_name": "B"}

    def test_rename_not_applied_twice(self):
        """Case functions run once per key, even when not idempotent."""
        class Shouty(BaseModel):
            model_config = ModelConfig(rename=NamingCase.PASCAL_CASE)

            user_id: int = 0

        assert Shouty(user_id=1).to_plain() == {"UserId": 1}


# ============================================================
# Test: Nested propagation
# ============================================================

class TestNestedPropagation:

    def test_list_of_models_uses_item_metadata(self):
        """Items follow LineItem's stored names and ignore policy at every index."""
        order = Order(
            order_id=1,
            line_items=[
                LineItem(sku_code="A-1", internal_note="n1", unit_price=1.5),
                LineItem(sku_code="B-2", internal_note="n2", unit_price=3.0),
            ],
        )
        assert order.to_plain()["lineItems"] == [
            {"SKU": "A-1", "unitPrice": 1.5},
            {"SKU": "B-2", "unitPrice": 3.0},
        ]

    def test_nested_model_without_config_inherits_enclosing_rename(self):
        order = Order(order_id=1, shipping_address=Address(street_name="Main", postal_code="123"))
        assert order.to_plain()["shippingAddress"] == {"streetName": "Main", "ZIP": "123"}

    def test_nested_model_without_enclosing_keeps_keys(self):
        """Address on its own has no rename policy."""
        address = Address(street_name="Main", postal_code="123")
        assert address.to_plain() == {"street_name": "Main", "ZIP": "123"}

    def test_list_of_lists_of_models(self):
        grid = Grid(
            grid_name="g",
            rows=[
                [Cell(cell_value=1, cell_label="a"), Cell(cell_value=2, cell_label="b")],
                [Cell(cell_value=3, cell_label="c")],
            ],
        )
        assert grid.to_plain() == {
            "grid-name": "g",
            "rows": [
                [{"cell-value": 1, "label": "a"}, {"cell-value": 2, "label": "b"}],
                [{"cell-value": 3, "label": "c"}],
            ],
        }

    def test_plain_dict_field_uses_enclosing_rename(self):
        """Plain sub-objects have no metadata and fall back to the enclosing model."""
        profile = Profile(
            display_name="ann",
            extra_data={"last_login": 1, "nested_map": {"inner_key": [{"deep_key": 2}]}},
        )
        assert profile.to_plain() == {
            "displayName": "ann",
            "extraData": {"lastLogin": 1, "nestedMap": {"innerKey": [{"deepKey": 2}]}},
        }


# ============================================================
# Test: Transforms
# ============================================================

class TestTransformSerialization:

    def test_transformed_value_passed_through(self):
        """The transform output is not renamed or traversed further."""
        plain = Wrapped(plain_field=1, wrapped_field=5).to_plain()
        assert plain == {"plainField": 1, "wrappedField": {"wrapped_value": 5}}

    def test_transform_called_once_with_to_plain(self):
        calls = []

        def record(value, direction):
            calls.append(direction)
            return value

        class Recorded(BaseModel):
            value: int = Field(default=0, transform=record)

        Recorded(value=1).to_plain()
        assert calls == [TransformType.TO_PLAIN]

    def test_transform_error_propagates(self):
        def broken(value, direction):
            raise RuntimeError("broken transform")

        class Broken(BaseModel):
            value: int = Field(default=0, transform=broken)

        with pytest.raises(RuntimeError, match="broken transform"):
            Broken(value=1).to_plain()


# ============================================================
# Test: No-case model
# ============================================================

class TestNonCaseModel:

    def test_keys_unchanged(self):
        record = RawRecord(some_key="v", payload={"innerKey": 1, "other_key": 2})
        assert record.to_plain() == {
            "some_key": "v",
            "payload": {"innerKey": 1, "other_key": 2},
        }
