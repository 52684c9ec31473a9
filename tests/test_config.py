import pytest
from pydantic import ValidationError

from luca.config import Settings, get_settings
from luca.parser import DEFAULT_MAX_DEPTH
from luca.solver import solve_document


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["LUCA_PLURAL_FALLBACK", "LUCA_MAX_NESTING_DEPTH", "LUCA_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.plural_fallback is False
    assert settings.max_nesting_depth == DEFAULT_MAX_DEPTH
    assert settings.log_level == "WARNING"


@pytest.mark.parametrize(
    "env, field, expected",
    [
        pytest.param({"LUCA_PLURAL_FALLBACK": "true"}, "plural_fallback", True),
        pytest.param({"LUCA_PLURAL_FALLBACK": "0"}, "plural_fallback", False),
        pytest.param({"LUCA_MAX_NESTING_DEPTH": "7"}, "max_nesting_depth", 7),
        pytest.param({"LUCA_LOG_LEVEL": "debug"}, "log_level", "debug"),
    ],
)
def test_from_environment(monkeypatch: pytest.MonkeyPatch, env: dict[str, str], field: str, expected) -> None:
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    assert getattr(Settings(_env_file=None), field) == expected


def test_nesting_depth_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LUCA_MAX_NESTING_DEPTH", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize("depth", ["201", "1000"])
def test_nesting_depth_is_capped(monkeypatch: pytest.MonkeyPatch, depth: str) -> None:
    monkeypatch.setenv("LUCA_MAX_NESTING_DEPTH", depth)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.fixture
def fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_are_read_once(monkeypatch: pytest.MonkeyPatch, fresh_settings_cache) -> None:
    monkeypatch.delenv("LUCA_MAX_NESTING_DEPTH", raising=False)
    settings = get_settings()
    monkeypatch.setenv("LUCA_MAX_NESTING_DEPTH", "zero")
    assert get_settings() is settings
    assert solve_document("1\n2") == "1\n2"


def test_bad_environment_fails_on_first_read(monkeypatch: pytest.MonkeyPatch, fresh_settings_cache) -> None:
    monkeypatch.setenv("LUCA_MAX_NESTING_DEPTH", "zero")
    with pytest.raises(ValidationError):
        get_settings()
