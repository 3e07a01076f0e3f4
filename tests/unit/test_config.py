"""Unit tests for configuration resolution and scoping."""

from __future__ import annotations

import asyncio
import dataclasses
import logging

import pytest

from systematics import (
    ConfigurationError,
    FrozenConfig,
    Settings,
    attempt,
    config_scope,
    current_config,
    resolve_config,
)
from systematics.config import clear_config_cache, load_env

pytestmark = pytest.mark.unit


def test_defaults() -> None:
    cfg = resolve_config()

    assert cfg.template_policy == "strict"
    assert cfg.strict_templates is True
    assert cfg.capture_log_level == "DEBUG"
    assert cfg.log_level == logging.DEBUG


def test_frozen_config_is_immutable() -> None:
    cfg = resolve_config()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.template_policy = "lenient"  # type: ignore[misc]


def test_environment_overrides_defaults(monkeypatch) -> None:
    monkeypatch.setenv("SYSTEMATICS_TEMPLATE_POLICY", " Lenient ")
    monkeypatch.setenv("SYSTEMATICS_CAPTURE_LOG_LEVEL", "warning")

    cfg = resolve_config()

    assert cfg.template_policy == "lenient"
    assert cfg.capture_log_level == "WARNING"
    assert cfg.log_level == logging.WARNING


def test_overrides_beat_environment(monkeypatch) -> None:
    monkeypatch.setenv("SYSTEMATICS_TEMPLATE_POLICY", "lenient")
    cfg = resolve_config({"template_policy": "strict"})
    assert cfg.template_policy == "strict"


def test_load_env_ignores_unrelated_and_unknown_keys(monkeypatch) -> None:
    monkeypatch.setenv("SYSTEMATICS_UNKNOWN_FIELD", "x")
    monkeypatch.setenv("OTHER_TEMPLATE_POLICY", "lenient")
    monkeypatch.setenv("SYSTEMATICS_TEMPLATE_POLICY", "lenient")

    assert load_env() == {"template_policy": "lenient"}


def test_numeric_log_level_is_accepted() -> None:
    cfg = resolve_config({"capture_log_level": logging.INFO})
    assert cfg.capture_log_level == "INFO"


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"template_policy": "sloppy"}, "template_policy"),
        ({"capture_log_level": "LOUD"}, "capture_log_level"),
        ({"capture_log_level": 15}, "capture_log_level"),
    ],
)
def test_invalid_values_raise_configuration_error(
    overrides: dict[str, object], field: str
) -> None:
    with pytest.raises(ConfigurationError) as exc:
        resolve_config(overrides)

    assert field in str(exc.value)
    assert exc.value.hint is not None
    assert exc.value.__cause__ is not None


def test_settings_schema_is_the_source_of_defaults() -> None:
    assert Settings().model_dump() == {
        "template_policy": "strict",
        "capture_log_level": "DEBUG",
    }


class TestCurrentConfig:
    def test_environment_default_is_cached(self, monkeypatch) -> None:
        first = current_config()
        monkeypatch.setenv("SYSTEMATICS_TEMPLATE_POLICY", "lenient")

        assert current_config() is first

        clear_config_cache()
        assert current_config().template_policy == "lenient"

    def test_scope_overrides_and_restores(self) -> None:
        outside = current_config()

        with config_scope(template_policy="lenient") as scoped:
            assert current_config() is scoped
            assert scoped.template_policy == "lenient"

        assert current_config() is outside

    def test_scope_accepts_frozen_config(self) -> None:
        cfg = FrozenConfig(template_policy="lenient", capture_log_level="ERROR")
        with config_scope(cfg) as scoped:
            assert scoped is cfg
            assert current_config() is cfg

    def test_scope_merges_mapping_and_keywords(self) -> None:
        with config_scope({"template_policy": "lenient"}, capture_log_level="info") as cfg:
            assert cfg.template_policy == "lenient"
            assert cfg.capture_log_level == "INFO"

    def test_scope_restored_after_error(self) -> None:
        outside = current_config()
        with pytest.raises(RuntimeError), config_scope(template_policy="lenient"):
            raise RuntimeError("inside scope")
        assert current_config() is outside

    def test_scope_is_isolated_per_task(self) -> None:
        async def read_policy() -> str:
            await asyncio.sleep(0)
            return current_config().template_policy

        async def scoped_read() -> str:
            with config_scope(template_policy="lenient"):
                return await read_policy()

        async def main() -> list[str]:
            return list(await asyncio.gather(scoped_read(), read_policy()))

        assert asyncio.run(main()) == ["lenient", "strict"]


def test_capture_log_level_controls_attempt_logging(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="systematics")

    def boom():
        raise RuntimeError("boom")

    with config_scope(capture_log_level="WARNING"):
        attempt(boom)

    captured = [r for r in caplog.records if r.name == "systematics.outcome"]
    assert [r.levelno for r in captured] == [logging.WARNING]
