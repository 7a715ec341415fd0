import io

import pytest

import symbolic_calculus as sc
from symbolic_calculus.cli import main


def test_prints_parse_derivatives_and_value(capsys):
    assert main(["x^3"]) == 0

    lines = capsys.readouterr().out.splitlines()

    assert lines[:3] == ["x^3", "3(x^2)", "3(2x)"]
    assert float(lines[3]) == pytest.approx(74.76)


def test_custom_variable_and_value(capsys):
    assert main(["t^2 + 3*t", "--variable", "t", "--value", "2"]) == 0

    lines = capsys.readouterr().out.splitlines()

    assert lines == ["t^2 + 3t", "2t + 3", "2", "2"]


def test_reads_expression_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("sin(x)\n"))

    assert main([]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Enter math expression: sin(x)\n")
    assert "cos(x)" in out


def test_parse_error_is_printed_and_reported(capsys):
    assert main(["sin(x"]) == 1

    lines = capsys.readouterr().out.splitlines()

    assert lines[:3] == ["expected ')' after function argument"] * 3
    assert lines[3] == "nan"


def test_strict_flag(capsys):
    assert main(["x 2", "--strict"]) == 1

    assert capsys.readouterr().out.splitlines()[0] == "unexpected trailing token 2"


def test_registry_is_shut_down_afterwards(capsys):
    main(["x"])

    assert not sc.get_global_configuration().is_initialized
