import math

import pytest

from polish_quadrature.__main__ import main, build_parser
from polish_quadrature.logging_system import LogLevel, configure_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    # main() binds the logger to the captured stderr
    configure_logging(LogLevel.MINIMAL)


def test_eval_prints_values(capsys):
    assert main(["(+ 1 2)", "--eval", "5", "--eval", "-1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["f(5.0) = 3.0", "f(-1.0) = 3.0"]


def test_integration(capsys):
    assert main(["(+ x 0)", "--from", "0", "--to", "1", "--order", "1", "--grain", "1000"]) == 0
    assert float(capsys.readouterr().out) == pytest.approx(0.5, abs=1e-6)


def test_integration_with_named_grain_and_threads(capsys):
    argv = ["(sin x)", "--from", "0", "--to", repr(math.pi), "--order", "4",
            "--grain", "medium", "--workers", "2", "--chunk-size", "1000"]
    assert main(argv) == 0
    assert float(capsys.readouterr().out) == pytest.approx(2.0, abs=1e-10)


def test_custom_variable(capsys):
    assert main(["(* t t)", "-v", "t", "--eval", "3"]) == 0
    assert capsys.readouterr().out.strip() == "f(3.0) = 9.0"


def test_symbolic_and_tree_output(capsys):
    assert main(["(* pi (sqr x))", "--symbolic", "--tree"]) == 0
    out = capsys.readouterr().out
    assert "pi*x**2" in out
    assert "MUL" in out
    assert "SQR" in out


def test_parse_error_exit_status(capsys):
    assert main(["(+ 1 2", "--eval", "0"]) == 2
    assert "Unclosed parentheses" in capsys.readouterr().err


def test_configuration_error_exit_status(capsys):
    assert main(["(sin x)", "--from", "0", "--to", "1", "--order", "7"]) == 2
    assert "error:" in capsys.readouterr().err


def test_evaluation_error_exit_status(capsys):
    assert main(["(/ 1 x)", "--eval", "0"]) == 1
    assert "Division by zero" in capsys.readouterr().err


def test_integration_error_exit_status(capsys):
    assert main(["(log x)", "--from", "-1", "--to", "1", "--grain", "10"]) == 1
    assert "Logarithm of a negative value" in capsys.readouterr().err


def test_limits_must_come_together():
    with pytest.raises(SystemExit) as excinfo:
        main(["(sin x)", "--from", "0"])
    assert excinfo.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args(["(sin x)"])
    assert args.variable == "x"
    assert args.order == "2"
    assert args.grain == "coarse"
    assert args.log_level == "minimal"
    assert args.points == []
