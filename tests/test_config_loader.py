from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from heliocron.config import (
    CONFIG_ENV_VAR,
    DEFAULT_COORDINATES,
    DEFAULT_TOLERANCE,
    EventKind,
    build_config,
    load_file_settings,
    resolve_config_path,
)
from heliocron.errors import ConfigError, InvalidEvent, InvalidTomlFile, ParseAltitude, ParseOffset


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file_or_flags() -> None:
    cfg = build_config(
        time_zone="+00:00",
        now_fn=lambda: datetime(2024, 3, 20, 23, 30, tzinfo=timezone.utc),
    )

    assert cfg.coordinates == DEFAULT_COORDINATES
    assert cfg.date == date(2024, 3, 20)
    assert cfg.event is None
    assert cfg.offset == timedelta(0)
    assert cfg.tolerance == DEFAULT_TOLERANCE
    assert cfg.run_missed_task is False


def test_default_date_follows_selected_time_zone() -> None:
    cfg = build_config(
        time_zone="+02:00",
        now_fn=lambda: datetime(2024, 3, 20, 23, 30, tzinfo=timezone.utc),
    )

    assert cfg.date == date(2024, 3, 21)


def test_file_values_are_overridden_by_explicit_values(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "heliocron.toml",
        'latitude = "59.9139N"\nlongitude = "10.7522E"\n\n[wait]\ntolerance_seconds = 5\nrun_missed_task = "true"\n',
    )

    from_file = build_config(config_path=path, date="2024-06-01", time_zone="+02:00")
    assert from_file.coordinates.latitude == pytest.approx(59.9139)
    assert from_file.coordinates.longitude == pytest.approx(10.7522)
    assert from_file.tolerance == timedelta(seconds=5)
    assert from_file.run_missed_task is True

    overridden = build_config(
        config_path=path,
        date="2024-06-01",
        time_zone="+02:00",
        latitude="10S",
        tolerance=timedelta(seconds=1),
        run_missed_task=False,
    )
    assert overridden.coordinates.latitude == pytest.approx(-10.0)
    assert overridden.coordinates.longitude == pytest.approx(10.7522)
    assert overridden.tolerance == timedelta(seconds=1)
    assert overridden.run_missed_task is False


def test_env_var_and_home_default_locate_the_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    assert resolve_config_path() is None

    home_file = _write(tmp_path / "home" / ".config" / "heliocron.toml", 'latitude = "1N"\n')
    assert resolve_config_path() == home_file

    env_file = _write(tmp_path / "env.toml", 'latitude = "2N"\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(env_file))
    assert resolve_config_path() == env_file
    assert resolve_config_path(home_file) == home_file


def test_malformed_toml_is_classified(tmp_path: Path) -> None:
    path = _write(tmp_path / "broken.toml", "latitude = \n[[[")

    with pytest.raises(ConfigError) as excinfo:
        build_config(config_path=path, date="2024-03-20", time_zone="+00:00")

    assert excinfo.value.kind == InvalidTomlFile()


def test_missing_explicit_file_is_classified(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_file_settings(tmp_path / "missing.toml")

    assert excinfo.value.kind == InvalidTomlFile()


@pytest.mark.parametrize(
    "text",
    [
        "latitude = true\n",
        "wait = 3\n",
        "[wait]\ntolerance_seconds = -1\n",
        "[wait]\ntolerance_seconds = \"soon\"\n",
        "[wait]\nrun_missed_task = \"maybe\"\n",
        "[wait]\nrun_missed_task = 1\n",
        "[wait]\ntolerance_seconds = inf\n",
        "[wait]\ntolerance_seconds = -inf\n",
        "[wait]\ntolerance_seconds = nan\n",
        "[wait]\ntolerance_seconds = 1e20\n",
        "[wait]\ntolerance_seconds = 9_000_000_000_000_000_000\n",
    ],
)
def test_wrong_value_types_in_file_are_classified(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / "bad-values.toml", text)

    with pytest.raises(ConfigError) as excinfo:
        load_file_settings(path)

    assert excinfo.value.kind == InvalidTomlFile()


def test_wait_fields_are_parsed() -> None:
    cfg = build_config(
        date="2024-03-20",
        time_zone="+00:00",
        event="custom_pm",
        altitude="-3.5",
        offset="-00:15",
    )

    assert cfg.event is EventKind.CUSTOM_PM
    assert cfg.custom_altitude == pytest.approx(-3.5)
    assert cfg.offset == -timedelta(minutes=15)


def test_custom_event_requires_altitude() -> None:
    with pytest.raises(ConfigError) as excinfo:
        build_config(date="2024-03-20", time_zone="+00:00", event="custom_am")

    assert excinfo.value.kind == ParseAltitude()


def test_invalid_offset_stops_config() -> None:
    with pytest.raises(ConfigError) as excinfo:
        build_config(date="2024-03-20", time_zone="+00:00", event="sunset", offset="soon")

    assert excinfo.value.kind == ParseOffset()


def test_config_is_immutable() -> None:
    cfg = build_config(date="2024-03-20", time_zone="+00:00")

    with pytest.raises(AttributeError):
        cfg.date = date(2025, 1, 1)  # type: ignore[misc]


def test_quoted_booleans_in_file_are_accepted(tmp_path: Path) -> None:
    path = _write(tmp_path / "quoted.toml", '[wait]\nrun_missed_task = "yes"\ntolerance_seconds = 2.5\n')

    settings = load_file_settings(path)

    assert settings.run_missed_task is True
    assert settings.tolerance == timedelta(seconds=2.5)


def test_negative_explicit_tolerance_is_a_config_error() -> None:
    with pytest.raises(ConfigError) as excinfo:
        build_config(date="2024-03-20", time_zone="+00:00", tolerance=timedelta(seconds=-1))

    assert excinfo.value.kind == InvalidTomlFile()


def test_wait_configs_must_name_an_event() -> None:
    with pytest.raises(ConfigError) as excinfo:
        build_config(date="2024-03-20", time_zone="+00:00", require_event=True)

    assert excinfo.value.kind == InvalidEvent()
    assert build_config(date="2024-03-20", time_zone="+00:00").event is None
