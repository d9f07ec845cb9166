from __future__ import annotations

from typing import Any

import pytest

from snapi import (
    BasicCapability,
    InvalidFunctionCallError,
    LibraryClassMissingFunctionError,
    function,
)


class IceWand:
    @staticmethod
    def ice_attack(args: dict[str, Any]) -> str:
        return f"ZAP {args['victim'].upper()}!"


class Tantrum(RuntimeError):
    pass


class BrokenWand:
    @staticmethod
    def ice_attack(args: dict[str, Any]) -> str:
        raise Tantrum("the wand is sulking")


def _ice_king(library: object | None = None) -> type[BasicCapability]:
    class IceKing(BasicCapability):
        ice_attack = function(lambda fn: fn.argument("victim", required=True, type="string"))

    if library is not None:
        IceKing.library(library)
    return IceKing


def test_unknown_function_raises_invalid_call() -> None:
    with pytest.raises(InvalidFunctionCallError) as excinfo:
        _ice_king(IceWand).run_function("icicle", {"victim": "Gunther"})

    assert excinfo.value.function_name == "icicle"


def test_missing_required_argument_raises_invalid_call() -> None:
    with pytest.raises(InvalidFunctionCallError) as excinfo:
        _ice_king(IceWand).run_function("ice_attack", {})

    assert excinfo.value.missing == ("victim",)


def test_missing_library_operation_raises() -> None:
    ice_king = _ice_king()

    with pytest.raises(LibraryClassMissingFunctionError) as excinfo:
        ice_king.run_function("ice_attack", {"victim": "Gunther"})

    assert excinfo.value.function_name == "ice_attack"
    assert excinfo.value.library is ice_king


def test_validation_runs_before_library_resolution() -> None:
    with pytest.raises(InvalidFunctionCallError):
        _ice_king().run_function("ice_attack", {})


def test_runs_function_in_library() -> None:
    ice_king = _ice_king(IceWand)

    assert ice_king.run_function("ice_attack", {"victim": "Gunther"}) == "ZAP GUNTHER!"


def test_library_receives_arguments_unchanged() -> None:
    received: list[Any] = []

    class Recorder:
        @staticmethod
        def ice_attack(args: dict[str, Any]) -> object:
            received.append(args)
            return sentinel

    sentinel = object()
    args = {"victim": "Gunther", "extra": 1}

    assert _ice_king(Recorder).run_function("ice_attack", args) is sentinel
    assert received == [args]
    assert received[0] is args


def test_library_errors_propagate_unchanged() -> None:
    with pytest.raises(Tantrum, match="sulking"):
        _ice_king(BrokenWand).run_function("ice_attack", {"victim": "Gunther"})


def test_capability_can_be_its_own_library() -> None:
    class Gunter(BasicCapability):
        _wenk = function(name="wenk")

        @staticmethod
        def wenk(args: dict[str, Any]) -> str:
            return "wenk" * args.get("times", 1)

    assert Gunter.library_class() is Gunter
    assert Gunter.valid_library_class() is True
    assert Gunter.run_function("wenk", {"times": 2}) == "wenkwenk"


def test_run_function_defaults_to_empty_arguments() -> None:
    class Bmo(BasicCapability):
        _play = function(name="play")

        @staticmethod
        def play(args: dict[str, Any]) -> dict[str, Any]:
            return dict(args)

    assert Bmo.run_function("play") == {}


def test_strict_types_reject_before_dispatch() -> None:
    with pytest.raises(InvalidFunctionCallError, match="declared types"):
        _ice_king(IceWand).run_function("ice_attack", {"victim": 7}, strict_types=True)
