import pytest

from ioc import Container, ParameterBag


@pytest.fixture
def bag():
    bag = ParameterBag()
    bag.set("foo", "bar")
    bag.set("cache", {"type": "apc"})
    return bag


def test_get_returns_top_level_and_nested_values(bag):
    assert bag.get("foo") == "bar"
    assert bag.get("cache.type") == "apc"
    assert bag.get("cache") == {"type": "apc"}


def test_missing_paths_return_default(bag):
    assert bag.get("undefined") is None
    assert bag.get("undefined", "q") == "q"
    assert bag.get("session.type") is None
    assert bag.get("foo.bar", "fallback") == "fallback"


def test_set_overwrites_nested_value(bag):
    bag.set("cache.type", "files")

    assert bag.get("cache.type") == "files"


def test_has_checks_for_non_none_values(bag):
    bag.set("nothing", None)

    assert bag.has("foo")
    assert bag.has("cache.type")
    assert not bag.has("undefined")
    assert not bag.has("nothing")


def test_setting_below_a_scalar_replaces_it_with_a_mapping():
    bag = ParameterBag()
    bag.set("a", "scalar")
    bag.set("a.b", 1)

    assert bag.get("a") == {"b": 1}
    assert bag.get("a.b") == 1


def test_set_creates_intermediate_mappings():
    bag = ParameterBag()
    bag.set("database.primary.host", "localhost")

    assert bag.all() == {"database": {"primary": {"host": "localhost"}}}


def test_initial_parameters_are_copied():
    initial = {"cache": {"type": "apc"}}
    bag = ParameterBag(initial)
    bag.set("cache.type", "files")

    assert initial == {"cache": {"type": "apc"}}
    assert bag.get("cache.type") == "files"


def test_container_exposes_parameters():
    container = Container(parameters={"cache": {"type": "apc"}})
    container.set_parameter("foo", "bar")

    assert container.get_parameter("cache.type") == "apc"
    assert container.get_parameter("foo") == "bar"
    assert container.get_parameter("undefined", "q") == "q"
    assert container.has_parameter("foo")
    assert not container.has_parameter("undefined")
    assert container.get_parameters() == {"cache": {"type": "apc"}, "foo": "bar"}


def test_all_returns_a_copy(bag):
    bag.all()["x"] = 1
    bag.all()["cache"]["type"] = "files"

    assert bag.get("x") is None
    assert bag.get("cache.type") == "apc"


def test_container_parameters_cannot_be_changed_through_the_copy():
    container = Container()
    container.get_parameters()["x"] = 1

    assert container.get_parameter("x") is None
