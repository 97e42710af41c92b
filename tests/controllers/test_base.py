"""Tests for controller and decorator foundations."""

from __future__ import annotations

from typing import Any

import pytest

from shopfront.controllers.attribute import AttributeDecorator
from shopfront.controllers.base import ChainRoot, ExpressionAccumulator
from shopfront.controllers.supplier import StandardSupplierController, SupplierDecorator
from shopfront.domain.context import Context
from shopfront.domain.criteria import Compare, Sort
from shopfront.errors import ContractError, DelegationError


class Marker:
    """Mutable expression stand-in."""

    def __init__(self, value: int) -> None:
        self.value = value


class MacroSupplier(StandardSupplierController):
    pass


@MacroSupplier.macro("codes")
def _codes(cntl: Any) -> list[str]:
    return [item["supplier.code"] for item in cntl.search()]


class TaggedSupplier(SupplierDecorator):
    pass


TaggedSupplier.macro("tag", lambda handle, suffix="": f"tagged{suffix}")


class TestExpressionAccumulator:
    def test_none_is_ignored(self) -> None:
        acc = ExpressionAccumulator()
        acc.add(None)
        assert len(acc) == 0

    def test_sorts_and_conditions_are_separated(self) -> None:
        acc = ExpressionAccumulator()
        first = Compare("==", "a", 1)
        second = Compare("==", "b", 2)
        for expr in (first, Sort("-", "a"), second, Sort("+", "b")):
            acc.add(expr)
        assert acc.conditions() == [first, second]
        assert acc.sortations() == [Sort("-", "a"), Sort("+", "b")]
        assert len(acc) == 4

    def test_returned_lists_are_snapshots(self) -> None:
        acc = ExpressionAccumulator()
        acc.add(Compare("==", "a", 1))
        acc.conditions().clear()
        assert len(acc.conditions()) == 1

    def test_fork_is_independent(self) -> None:
        acc = ExpressionAccumulator()
        marker = Marker(1)
        acc.add(marker)
        clone = acc.fork()
        clone.add(Marker(2))

        assert acc.conditions() == [marker]
        assert len(clone.conditions()) == 2
        assert clone.conditions()[0] is not marker
        assert clone.conditions()[0].value == 1


class TestController:
    def test_fluent_calls_return_self(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        assert cntl.compare("==", "supplier.code", "a") is cntl
        assert cntl.add_expression(None) is cntl

    def test_unbound_object_is_self(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        assert cntl.object() is cntl

    def test_duplicate_has_own_state(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        cntl.compare("==", "supplier.code", "a")
        dup = cntl.duplicate()
        dup.compare("==", "supplier.code", "b").sort("-code")

        assert len(cntl.get_conditions()) == 1
        assert cntl.get_sortations() == []
        assert len(dup.get_conditions()) == 2
        assert dup.get_sortations() == [Sort("-", "code")]

    def test_duplicate_binds_itself(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        cntl.set_object(cntl)
        dup = cntl.duplicate()
        assert dup.object() is dup
        assert cntl.object() is cntl

    def test_duplicate_with_root_leaves_binding(self, context: Context) -> None:
        root = ChainRoot()
        dup = StandardSupplierController(context).duplicate(root)
        assert dup.root is root
        assert root.target is None

    def test_duplicate_slice_is_independent(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        cntl.duplicate().slice(0, 1)
        assert len(cntl.search()) == 2


class TestMacros:
    def test_call_registered_macro(self, context: Context) -> None:
        assert MacroSupplier(context).call("codes") == ["demo-ballroom", "demo-test"]

    def test_call_through_decorator(self, context: Context) -> None:
        outer = SupplierDecorator(MacroSupplier(context), context)
        assert outer.call("codes") == ["demo-ballroom", "demo-test"]

    def test_decorator_macro_wins(self, context: Context) -> None:
        outer = TaggedSupplier(MacroSupplier(context), context)
        assert outer.call("tag", suffix="!") == "tagged!"

    def test_macros_are_per_class(self) -> None:
        assert StandardSupplierController.find_macro("codes") is None
        assert MacroSupplier.find_macro("codes") is _codes

    def test_macros_are_inherited(self) -> None:
        class Sub(MacroSupplier):
            pass

        assert Sub.find_macro("codes") is _codes

    def test_missing_macro(self, context: Context) -> None:
        outer = SupplierDecorator(StandardSupplierController(context), context)
        with pytest.raises(DelegationError) as exc_info:
            outer.call("nothing")
        assert exc_info.value.code == 404
        assert isinstance(exc_info.value, AttributeError)

    def test_invalid_macro_name(self) -> None:
        with pytest.raises(ValueError):
            MacroSupplier.macro("not valid", lambda cntl: None)


class TestControllerDecorator:
    def test_rejects_wrong_interface(self, context: Context) -> None:
        with pytest.raises(ContractError) as exc_info:
            AttributeDecorator(StandardSupplierController(context), context)
        assert exc_info.value.code == 400
        assert isinstance(exc_info.value, TypeError)

    def test_fluent_calls_return_decorator(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        outer = SupplierDecorator(cntl, context)
        assert outer.compare("==", "supplier.code", "a") is outer
        assert outer.sort("code") is outer
        assert cntl.get_conditions() == [Compare("==", "supplier.code", "a")]
        assert outer.get_sortations() == [Sort("+", "code")]

    def test_layers(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        inner = SupplierDecorator(cntl, context)
        outer = TaggedSupplier(inner, context)
        assert outer.layers() == [outer, inner, cntl]

    def test_set_object_reaches_every_layer(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        inner = SupplierDecorator(cntl, context)
        outer = SupplierDecorator(inner, context)
        assert outer.set_object(outer) is outer
        assert cntl.object() is outer
        assert inner.object() is outer
        assert outer.root is cntl.root

    def test_duplicate_rebuilds_chain(self, context: Context) -> None:
        cntl = StandardSupplierController(context)
        outer = SupplierDecorator(SupplierDecorator(cntl, context), context)
        outer.set_object(outer)
        outer.compare("==", "supplier.code", "a")

        dup = outer.duplicate()
        dup.compare("==", "supplier.code", "b")

        layers = dup.layers()
        assert all(layer is not old for layer, old in zip(layers, outer.layers(), strict=True))
        assert all(layer.object() is dup for layer in layers)
        assert outer.object() is outer
        assert len(outer.get_conditions()) == 1
        assert len(dup.get_conditions()) == 2

    def test_duplicate_copies_container_attributes(self, context: Context) -> None:
        outer = SupplierDecorator(StandardSupplierController(context), context)
        outer.notes = ["kept"]  # type: ignore[attr-defined]
        outer.flags = {"a": 1}  # type: ignore[attr-defined]

        dup = outer.duplicate()
        dup.notes.append("dup")  # type: ignore[attr-defined]
        dup.flags["b"] = 2  # type: ignore[attr-defined]

        assert outer.notes == ["kept"]  # type: ignore[attr-defined]
        assert outer.flags == {"a": 1}  # type: ignore[attr-defined]
        assert dup.controller is not outer.controller
