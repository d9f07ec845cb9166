from __future__ import annotations

import pytest

from snapi import BasicCapability, CapabilityDefinitionError, function
from snapi.capabilities import ArgumentSpec, FunctionSpec


def test_base_namespace_comes_from_class_name() -> None:
    assert BasicCapability.namespace() == "basic_capability"


def test_subclass_namespace_is_recomputed() -> None:
    LadyRainicornAndPrinceMonochromocorn = type(
        "LadyRainicornAndPrinceMonochromocorn", (BasicCapability,), {}
    )
    assert (
        LadyRainicornAndPrinceMonochromocorn.namespace()
        == "lady_rainicorn_and_prince_monochromocorn"
    )


def test_fresh_capability_has_empty_registry() -> None:
    class Marceline(BasicCapability):
        pass

    assert dict(Marceline.functions()) == {}
    assert Marceline.to_hash() == {}


def test_to_hash_with_return_type_only() -> None:
    class PrinceLemonGrab(BasicCapability):
        @function
        def summon_zombies(fn):
            fn.returns("raw")

    assert PrinceLemonGrab.to_hash() == {
        "summon_zombies": {"return_type": "raw", "arguments": []}
    }


def test_argument_fields_appear_in_schema() -> None:
    class PrincessBubblegum(BasicCapability):
        create_candy_person = function(
            lambda fn: fn.argument(
                "candy_base",
                lambda arg: arg.default_value("sugar")
                .format("anything")
                .list(True)
                .required(True)
                .type("enum"),
            ).returns("structured")
        )

    assert PrincessBubblegum.to_hash() == {
        "create_candy_person": {
            "return_type": "structured",
            "arguments": [
                {
                    "name": "candy_base",
                    "default_value": "sugar",
                    "format": "anything",
                    "list": True,
                    "required": True,
                    "type": "enum",
                }
            ],
        }
    }


def test_only_explicitly_set_argument_fields_are_exported() -> None:
    class Peppermint(BasicCapability):
        brew = function(lambda fn: fn.argument("potion", type="string"))

    assert Peppermint.to_hash()["brew"]["arguments"] == [{"name": "potion", "type": "string"}]
    spec = Peppermint.functions()["brew"].arguments[0]
    assert spec.required is False
    assert spec.list is False
    assert spec.default_value is None


def test_declaration_attributes_are_removed_from_class() -> None:
    class Tree(BasicCapability):
        grow = function()

    assert "grow" not in vars(Tree)
    assert Tree.to_hash() == {"grow": {"return_type": None, "arguments": []}}


def test_function_without_configuration_has_no_arguments() -> None:
    class Gunter(BasicCapability):
        wenk = function()

    spec = Gunter.functions()["wenk"]
    assert spec == FunctionSpec(name="wenk")
    assert spec.return_type is None
    assert spec.arguments == ()


def test_explicit_name_overrides_attribute_name() -> None:
    class Lsp(BasicCapability):
        _declaration = function(lambda fn: fn.returns("raw"), name="lumps")

        @function(name="whatever")
        def _other(fn):
            fn.returns("structured")

    assert list(Lsp.functions()) == ["lumps", "whatever"]
    assert Lsp.functions()["whatever"].return_type == "structured"


def test_functions_keep_declaration_order() -> None:
    class Hunson(BasicCapability):
        first = function()
        second = function()
        third = function()

    assert list(Hunson.to_hash()) == ["first", "second", "third"]


def test_arguments_keep_declaration_order() -> None:
    class CinnamonBun(BasicCapability):
        bake = function(
            lambda fn: fn.argument("dough").argument("icing").argument("oven", required=True)
        )

    names = [arg["name"] for arg in CinnamonBun.to_hash()["bake"]["arguments"]]
    assert names == ["dough", "icing", "oven"]


def test_redeclaring_function_overwrites_previous_spec() -> None:
    class Lich(BasicCapability):
        destroy = function(lambda fn: fn.returns("raw"))

    Lich.function("destroy", lambda fn: fn.returns("structured"))

    assert Lich.to_hash() == {"destroy": {"return_type": "structured", "arguments": []}}


def test_function_can_be_declared_after_class_creation() -> None:
    class Shelby(BasicCapability):
        pass

    spec = Shelby.function("play_bass", lambda fn: fn.argument("song", required=True))

    assert Shelby.functions()["play_bass"] is spec
    assert spec.required_arguments == (ArgumentSpec(name="song", required=True),)


def test_functions_are_not_shared_between_sibling_classes() -> None:
    class FinnTheHuman(BasicCapability):
        enchyridion = function(lambda fn: fn.returns("raw"))

    class JakeTheDog(BasicCapability):
        beemo = function(lambda fn: fn.returns("raw"))

    assert FinnTheHuman.functions().get("enchyridion") is not None
    assert FinnTheHuman.functions().get("beemo") is None

    assert JakeTheDog.functions().get("enchyridion") is None
    assert JakeTheDog.functions().get("beemo") is not None

    assert dict(BasicCapability.functions()) == {}


def test_subclass_of_capability_starts_with_fresh_registry() -> None:
    class Finn(BasicCapability):
        sword = function()

    class FernTheGrass(Finn):
        pass

    FernTheGrass.function("grass_sword")

    assert list(FernTheGrass.functions()) == ["grass_sword"]
    assert list(Finn.functions()) == ["sword"]
    assert FernTheGrass.namespace() == "fern_the_grass"
    assert FernTheGrass.library_class() is FernTheGrass


def test_functions_view_is_read_only() -> None:
    class Banana(BasicCapability):
        guard = function()

    with pytest.raises(TypeError):
        Banana.functions()["other"] = Banana.functions()["guard"]  # type: ignore[index]


def test_function_specs_are_frozen() -> None:
    class Ooo(BasicCapability):
        rule = function(lambda fn: fn.argument("subject", required=True))

    spec = Ooo.functions()["rule"]
    with pytest.raises(ValueError):
        spec.return_type = "raw"  # type: ignore[misc]


def test_unknown_argument_field_is_rejected() -> None:
    with pytest.raises(CapabilityDefinitionError):

        class Badlands(BasicCapability):
            broken = function(lambda fn: fn.argument("thing", colour="red"))


def test_empty_function_name_is_rejected() -> None:
    with pytest.raises(CapabilityDefinitionError):
        BasicCapability.function("")


def test_function_requires_callable_configuration() -> None:
    with pytest.raises(CapabilityDefinitionError):
        function("summon_zombies")  # type: ignore[arg-type]
