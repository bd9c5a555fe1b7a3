import json
from pathlib import Path

import pytest

from config import default_config_path, load_config
from models import OptionDefinition, ValidationError


def test_missing_config_uses_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    config = load_config()

    assert default_config_path() == tmp_path / "config" / "datepick" / "config.json"
    assert config.date_format == "%Y-%m-%d"
    assert config.show_range_label_on_input is True
    assert config.show_default_options is True
    assert config.rematch_on_change is False
    assert config.options == ()
    assert config.history_path == tmp_path / "data" / "datepick" / "history.parquet"


def test_config_file_overrides_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "date_format": "%d/%m/%Y",
                "show_range_label_on_input": False,
                "rematch_on_change": True,
                "history_path": str(tmp_path / "h.parquet"),
                "options": [
                    {"key": "single_date", "label": "Today"},
                    {"key": "date_diff", "label": "Last 14 Days", "date_diff": -14},
                ],
            }
        )
    )

    config = load_config(path)

    assert config.date_format == "%d/%m/%Y"
    assert config.show_range_label_on_input is False
    assert config.rematch_on_change is True
    assert config.history_path == tmp_path / "h.parquet"
    assert config.options == (
        OptionDefinition(key="single_date", label="Today"),
        OptionDefinition(key="date_diff", label="Last 14 Days", date_diff=-14),
    )


def test_trailing_commas_are_tolerated(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text('{\n  "date_format": "%m/%d/%Y",\n}\n')

    assert load_config(path).date_format == "%m/%d/%Y"


def test_unreadable_json_falls_back_to_defaults(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{ this is not json")

    assert load_config(path).date_format == "%Y-%m-%d"


@pytest.mark.parametrize(
    "options",
    [
        {"key": "single_date"},
        [{"key": "weekly", "label": "Weekly"}],
    ],
)
def test_malformed_options_raise(tmp_path: Path, options) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"options": options}))

    with pytest.raises(ValidationError):
        load_config(path)


@pytest.mark.parametrize(
    "name",
    ["show_range_label_on_input", "show_default_options", "rematch_on_change"],
)
@pytest.mark.parametrize("value", ["false", 0, 1, "yes"])
def test_non_boolean_flags_raise(tmp_path: Path, name: str, value) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({name: value}))

    with pytest.raises(ValidationError):
        load_config(path)


def test_boolean_flags_are_read(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"show_default_options": False, "rematch_on_change": True}))

    config = load_config(path)

    assert config.show_default_options is False
    assert config.rematch_on_change is True
    assert config.show_range_label_on_input is True
