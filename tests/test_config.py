"""运行时设置加载测试"""

import pytest
from pomodoro_rpg.config import GameSettings, get_db_path, load_game_settings

_ENV_VARS = (
    "POMODORO_RPG_DATA_DIR",
    "POMODORO_RPG_DB_PATH",
    "POMODORO_RPG_SAVE_DEBOUNCE_MS",
    "POMODORO_RPG_EVENT_MODE",
    "POMODORO_RPG_TICK_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    """未设置环境变量时使用默认值"""
    settings = load_game_settings()
    assert settings.db_path.endswith("pomodoro_rpg.db")
    assert settings.save_debounce_ms == 500
    assert settings.event_mode == "production"
    assert settings.tick_seconds == 1.0


def test_db_path_follows_data_dir(monkeypatch, tmp_path):
    """数据库路径跟随数据目录"""
    monkeypatch.setenv("POMODORO_RPG_DATA_DIR", str(tmp_path))
    assert get_db_path() == str(tmp_path / "pomodoro_rpg.db")


def test_env_overrides(monkeypatch):
    """环境变量覆盖各项设置"""
    monkeypatch.setenv("POMODORO_RPG_DB_PATH", "/tmp/custom.db")
    monkeypatch.setenv("POMODORO_RPG_SAVE_DEBOUNCE_MS", "250")
    monkeypatch.setenv("POMODORO_RPG_EVENT_MODE", "test")
    monkeypatch.setenv("POMODORO_RPG_TICK_SECONDS", "0.5")

    settings = load_game_settings()
    assert settings.db_path == "/tmp/custom.db"
    assert settings.save_debounce_ms == 250
    assert settings.event_mode == "test"
    assert settings.tick_seconds == 0.5


@pytest.mark.parametrize(
    ("env_var", "value", "field", "fallback"),
    [
        ("POMODORO_RPG_SAVE_DEBOUNCE_MS", "soon", "save_debounce_ms", 500),
        ("POMODORO_RPG_SAVE_DEBOUNCE_MS", "-1", "save_debounce_ms", 500),
        ("POMODORO_RPG_EVENT_MODE", "chaos", "event_mode", "production"),
        ("POMODORO_RPG_TICK_SECONDS", "0", "tick_seconds", 1.0),
        ("POMODORO_RPG_TICK_SECONDS", "fast", "tick_seconds", 1.0),
    ],
)
def test_invalid_values_fall_back(monkeypatch, env_var, value, field, fallback):
    """非法环境变量值回退到默认值"""
    monkeypatch.setenv(env_var, value)
    settings = load_game_settings()
    assert getattr(settings, field) == fallback


def test_settings_validation():
    """非法参数构造设置时报错"""
    with pytest.raises(ValueError):
        GameSettings(tick_seconds=0)
    with pytest.raises(ValueError):
        GameSettings(save_debounce_ms=-5)


def test_development_event_mode(monkeypatch):
    """development 模式可通过环境变量选择"""
    monkeypatch.setenv("POMODORO_RPG_EVENT_MODE", "development")
    assert load_game_settings().event_mode == "development"
