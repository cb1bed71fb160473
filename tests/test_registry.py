from typing import Annotated, Optional, Union

import pytest

from ioc.errors import InvalidBindingError
from ioc.registry import (
    BindingRegistry,
    get_dependencies,
    inferred_name,
    key_for,
    type_name,
)
from sample_components import KeywordOnly, Plain, WithDefault


@pytest.fixture
def registry():
    return BindingRegistry()


def test_classes_are_keyed_by_dotted_type_name():
    assert key_for(Plain) == "sample_components.Plain"
    assert key_for("mailer") == "mailer"
    assert type_name(Plain) == "sample_components.Plain"


@pytest.mark.parametrize("name", [None, "", 42, ["a"]])
def test_malformed_names_are_rejected(registry, name):
    with pytest.raises(InvalidBindingError, match="non-empty string or a class"):
        registry.register(name)


def test_recipe_must_be_callable_or_a_type_reference(registry):
    with pytest.raises(InvalidBindingError, match="Recipe for \\[mailer\\]"):
        registry.register("mailer", 42)


def test_recipe_defaults_to_name(registry):
    binding = registry.register("sample_components.Plain")

    assert binding.recipe == "sample_components.Plain"
    assert not binding.shared
    assert not registry.has_alias("sample_components.Plain")


def test_type_recipe_is_aliased_to_binding_name(registry):
    registry.register("b2", Plain, shared=True)

    assert registry.resolve_alias(Plain) == "b2"
    assert registry.resolve_alias("sample_components.Plain") == "b2"
    assert registry.is_shared("b2")


def test_string_recipe_is_aliased_to_binding_name(registry):
    registry.register("plain", "sample_components.Plain")

    assert registry.resolve_alias("sample_components.Plain") == "plain"


def test_factory_recipe_records_no_alias(registry):
    def factory(container, parameters):
        return Plain()

    registry.register("plain", factory)

    assert registry.binding("plain").recipe is factory
    assert registry.resolve_alias("plain") == "plain"


def test_alias_resolution_is_a_single_hop(registry):
    registry.alias("a", "b")
    registry.alias("b", "c")

    assert registry.resolve_alias("a") == "b"
    assert registry.resolve_alias("unknown") == "unknown"


def test_reregistration_replaces_binding(registry):
    registry.register("plain", Plain)
    registry.register("plain", WithDefault, shared=True)

    assert registry.binding("plain").recipe is WithDefault
    assert registry.is_shared("plain")


def test_unbound_names_are_not_shared(registry):
    assert not registry.is_shared("missing")
    assert registry.binding("missing") is None


def test_extenders_are_kept_in_registration_order(registry):
    first, second = (lambda o, c: o), (lambda o, c: o)
    registry.add_extender("plain", first)
    registry.add_extender("plain", second)

    assert registry.extenders("plain") == [first, second]
    assert registry.extenders("other") == []


def test_inferred_name():
    def make_mailer():
        pass

    def transport():
        pass

    assert inferred_name(make_mailer) == "mailer"
    assert inferred_name(transport) == "transport"
    assert inferred_name(Plain) == "Plain"


def test_dependencies_of_a_class_constructor():
    plain, default = get_dependencies(WithDefault)

    assert plain.parameter_name == "plain"
    assert plain.declared_type is Plain
    assert not plain.has_default
    assert default.parameter_name == "default"
    assert default.declared_type is None
    assert default.default == "boris"


def test_dependencies_identified_by_annotated_name():
    def func(untyped, cache: Annotated[object, "redis"], *args, **kwargs):
        pass

    untyped, cache = get_dependencies(func)

    assert untyped.component_name is None
    assert cache.declared_type is object
    assert cache.component_name == "redis"


def test_keyword_only_dependencies_are_flagged():
    plain, retries = get_dependencies(KeywordOnly)

    assert plain.keyword_only
    assert retries.keyword_only
    assert retries.default == 3


def test_class_without_constructor_has_no_dependencies():
    assert get_dependencies(Plain) == []


def test_optional_types_are_unwrapped():
    def func(a: Optional[Plain], b: "Plain | None", c: Union[Plain, int, None]):
        pass

    a, b, c = get_dependencies(func)

    assert a.declared_type is Plain
    assert b.declared_type is Plain
    assert c.declared_type == Union[Plain, int, None]
