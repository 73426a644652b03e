import json

import pytest

from precise_calc import config_manager
from precise_calc import error as E
from precise_calc.MathEngine import Calculator, calculate
from precise_calc.ScientificEngine import AngleMode


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)

    def write(settings):
        path.write_text(json.dumps(settings), encoding="utf-8")
        return path

    return write


def test_shipped_settings():
    settings = config_manager.load_setting_value("all")
    assert settings["angle_mode"] == "radians"
    assert settings["precise_display"] is True


def test_missing_config_falls_back_to_defaults(config_file):
    assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
    assert config_manager.load_setting_value("angle_mode") == "radians"
    assert config_manager.load_setting_value("unknown") is None


def test_broken_config_falls_back_to_defaults(config_file):
    path = config_file({})
    path.write_text("{not json", encoding="utf-8")
    assert config_manager.load_setting_value("precise_display") is True


def test_non_object_config_falls_back_to_defaults(config_file):
    config_file(["degrees"])
    assert config_manager.load_setting_value("angle_mode") == "radians"


def test_partial_config_is_merged_with_defaults(config_file):
    config_file({"angle_mode": "degrees"})
    assert config_manager.load_setting_value("all") == {"angle_mode": "degrees", "precise_display": True}


def test_calculator_reads_default_angle_mode(config_file):
    config_file({"angle_mode": "deg"})
    assert Calculator().angle_mode is AngleMode.DEGREES


def test_explicit_angle_mode_wins_over_config(config_file):
    config_file({"angle_mode": "degrees"})
    assert Calculator(AngleMode.RADIANS).angle_mode is AngleMode.RADIANS


@pytest.mark.parametrize("text, mode", [
    ("rad", AngleMode.RADIANS),
    ("Radians", AngleMode.RADIANS),
    (" DEG ", AngleMode.DEGREES),
    ("degrees", AngleMode.DEGREES),
])
def test_angle_mode_from_setting(text, mode):
    assert AngleMode.from_setting(text) is mode


def test_invalid_angle_mode():
    with pytest.raises(ValueError):
        AngleMode.from_setting("grad")
    with pytest.raises(ValueError):
        Calculator("gradians")


def test_set_and_toggle_angle_mode():
    calculator = Calculator(AngleMode.RADIANS)
    calculator.set_angle_mode("degrees")
    assert calculator.get_angle_mode() is AngleMode.DEGREES
    assert calculator.toggle_angle_mode() is AngleMode.RADIANS
    assert calculator.toggle_angle_mode() is AngleMode.DEGREES


def test_calculator_constants_are_read_only():
    calculator = Calculator(AngleMode.RADIANS)
    with pytest.raises(TypeError):
        calculator.constants["PI"] = 3.0


def test_calculator_with_custom_constants():
    calculator = Calculator(AngleMode.RADIANS, constants={"G": 9.81})
    assert calculate("G * 2", calculator) == "= 19.62"
    with pytest.raises(E.UnknownIdentifierError):
        calculate("PI", calculator)


@pytest.mark.parametrize("problem, expected", [
    ("2 + 3 * 4", "= 14"),
    ("1 / 4", "= 1/4"),
    ("sqrt(2)", "= √2"),
    ("PI / 2", "= π/2 (right angle)"),
    ("atan(1)", "= π/4 (half right angle)"),
    ("5 * PI / 12", "= 5π/12"),
    ("sin(2)", "= 0.9092974268"),
])
def test_calculate_in_radians(problem, expected):
    assert calculate(problem, Calculator(AngleMode.RADIANS)) == expected


@pytest.mark.parametrize("problem, expected", [
    ("asin(1)", "= 90° (right angle)"),
    ("degs(PI)", "= 180° (straight angle)"),
    ("acos(0.5) * 2", "= 120°"),
    ("sin(30)", "= 1/2"),
])
def test_calculate_in_degrees(problem, expected):
    assert calculate(problem, Calculator(AngleMode.DEGREES)) == expected


def test_zero_result_has_no_angle_description():
    assert calculate("2 - 2", Calculator(AngleMode.RADIANS)) == "= 0"
    assert calculate("sin(0)", Calculator(AngleMode.DEGREES)) == "= 0"
    assert calculate("PI - PI", Calculator(AngleMode.RADIANS)) == "= 0"


def test_calculate_without_precise_display(config_file):
    config_file({"precise_display": False})
    calculator = Calculator(AngleMode.RADIANS)
    assert calculate("1 / 3", calculator) == "= 0.3333333333"
    assert calculate("PI", calculator) == "= 3.141592654"


def test_calculate_uses_a_fresh_calculator_by_default():
    assert calculate("2^3^2") == "= 64"


@pytest.mark.parametrize("problem, error_type", [
    ("1 / 0", E.CalculationError),
    ("2 $ 3", E.LexicalError),
    ("(2 + 3", E.SyntaxError),
    ("", E.SyntaxError),
    ("unknown + 1", E.UnknownIdentifierError),
])
def test_calculate_attaches_the_equation_to_errors(problem, error_type):
    with pytest.raises(error_type) as excinfo:
        calculate(problem, Calculator(AngleMode.RADIANS))
    assert excinfo.value.equation == problem
    assert isinstance(excinfo.value, E.MathError)


def test_error_categories():
    with pytest.raises(E.MathError) as excinfo:
        calculate("sqrt(-4)", Calculator(AngleMode.RADIANS))
    assert excinfo.value.category == "Math Error"
