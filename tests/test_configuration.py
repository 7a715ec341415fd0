import math

import pytest

import symbolic_calculus as sc
from symbolic_calculus import LogLevel, configure_logging
from symbolic_calculus.configuration import Configuration, BUILTIN_CONSTANTS
from symbolic_calculus.expression_tree.core.functions import BUILTIN_FUNCTIONS, SineFunction


def test_fresh_registry_knows_nothing():
    configuration = Configuration()

    assert not configuration.is_initialized
    assert configuration.get_function("sin") is None
    assert math.isnan(configuration.get_constant_value("pi"))


def test_init_registers_builtins(registry):
    assert registry.is_initialized
    assert sorted(registry.function_names()) == sorted(BUILTIN_FUNCTIONS)
    assert len(registry.function_names()) == 17
    assert sorted(registry.constant_names()) == ["e", "pi"]
    assert registry.get_constant_value("pi") == pytest.approx(math.pi)
    assert registry.get_function("sqrt") is BUILTIN_FUNCTIONS["sqrt"]


def test_init_is_idempotent(registry):
    registry.init()

    assert registry.get_stats() == {
        "initialized": True,
        "function_count": len(BUILTIN_FUNCTIONS),
        "constant_count": len(BUILTIN_CONSTANTS),
    }


def test_shutdown_releases_everything(registry):
    registry.shutdown()

    assert not registry.is_initialized
    assert registry.function_names() == []
    assert registry.get_function("sin") is None
    assert math.isnan(registry.get_constant_value("e"))


def test_registry_can_be_reinitialised(registry):
    registry.shutdown()
    registry.init()

    assert registry.get_function("cos") is BUILTIN_FUNCTIONS["cos"]


def test_add_function_keeps_the_first_registration(registry):
    registry.add_function(SineFunction())

    assert registry.get_function("sin") is BUILTIN_FUNCTIONS["sin"]


def test_duplicate_function_is_reported(registry, capsys):
    configure_logging(LogLevel.MINIMAL)
    try:
        registry.add_function(SineFunction())
        registry.add_function(BUILTIN_FUNCTIONS["cos"])
    finally:
        configure_logging(LogLevel.MODERATE)

    err = capsys.readouterr().err
    assert "Function sin is already registered" in err
    assert "cos" not in err


def test_add_function_rejects_non_functions(registry):
    with pytest.raises(TypeError):
        registry.add_function("sin")


@pytest.mark.parametrize("name", ["", "x1", "my_const", "two words"])
def test_add_constant_rejects_untokenizable_names(registry, name):
    with pytest.raises(ValueError):
        registry.add_constant(name, 1.0)


def test_global_registry_is_a_singleton():
    assert sc.get_global_configuration() is sc.get_global_configuration()


def test_module_shutdown_clears_global_registry(global_registry):
    sc.shutdown()

    assert not global_registry.is_initialized
    assert sc.parse("sin(x)").to_string() == "sin"


def test_nodes_created_before_shutdown_keep_working(global_registry):
    node = sc.parse("sin(x) + pi")
    sc.shutdown()

    assert node.evaluate({"x": 0.0}) == pytest.approx(math.pi)
