import json
from datetime import datetime

import pytest

from marshalkit import EngineSettings, SettingsError, configure, get_settings, load_settings, reset_settings
from marshalkit.utils import CONFIG_ENV_VAR
from tests.schemas import Meeting, Tag


def test_defaults():
    settings = get_settings()
    assert settings.datetime_format == "%Y-%m-%dT%H:%M:%S"
    assert settings.range_separator == "..."
    assert settings.cache_record_types


def test_settings_are_frozen():
    with pytest.raises(Exception):
        get_settings().date_format = "%d"


def test_load_yaml(tmp_path):
    path = tmp_path / "marshalkit.yaml"
    path.write_text("date_format: '%d.%m.%Y'\ncache_record_types: false\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings.date_format == "%d.%m.%Y"
    assert not settings.cache_record_types


def test_load_json(tmp_path):
    path = tmp_path / "marshalkit.json"
    path.write_text(json.dumps({"time_format": "%H:%M"}), encoding="utf-8")
    assert load_settings(path).time_format == "%H:%M"


@pytest.mark.parametrize(
    "content, message",
    [
        ("unknown_key: 1\n", "Settings validation failed"),
        ("date_format: ''\n", "value cannot be empty"),
        ("- a\n", "must be a dictionary"),
        ("date_format: [\n", "Invalid YAML"),
    ],
)
def test_invalid_settings(tmp_path, content, message):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SettingsError, match=message):
        load_settings(path)


def test_missing_and_unsupported_files(tmp_path):
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "nope.yaml")
    path = tmp_path / "settings.toml"
    path.write_text("x = 1", encoding="utf-8")
    with pytest.raises(SettingsError, match="Unsupported file format"):
        load_settings(path)


def test_env_var_names_settings_file(tmp_path, monkeypatch):
    path = tmp_path / "marshalkit.yaml"
    path.write_text("datetime_format: '%Y/%m/%d %H:%M'\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    reset_settings()
    assert get_settings().datetime_format == "%Y/%m/%d %H:%M"


def test_configure_changes_default_patterns():
    configure(datetime_format="%Y/%m/%d %H:%M")
    meeting = Meeting.from_dict(
        {"title": "t", "starts_at": "02.03.2024 10:30", "ends_at": "2024-03-02 11:30:00"}
    )
    data = meeting.to_dict(stringify=True, group="input")
    assert data["starts_at"] == "2024/03/02 10:30"
    assert meeting.ends_at == datetime(2024, 3, 2, 11, 30)


def test_configure_with_settings_object():
    configure(EngineSettings(cache_record_types=False))
    assert not get_settings().cache_record_types
    assert Tag.from_dict({"name": "t"}) == Tag("t")


def test_load_yml_suffix_and_supported_formats_message(tmp_path):
    path = tmp_path / "marshalkit.yml"
    path.write_text("range_separator: '..'\n", encoding="utf-8")
    assert load_settings(path).range_separator == ".."
    other = tmp_path / "settings.ini"
    other.write_text("[x]", encoding="utf-8")
    with pytest.raises(SettingsError, match=r"\.yaml, \.yml, \.json"):
        load_settings(other)
