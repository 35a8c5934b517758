import json

import pytest

from gaja_overlay import config as config_module


@pytest.fixture()
def config_paths(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    log_dir = config_dir / "logs"
    lock_file = config_dir / "app.lock"
    config_file = config_dir / "config.json"

    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "LOG_DIR", log_dir)
    monkeypatch.setattr(config_module, "LOCK_FILE", lock_file)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    return config_file


def test_settings_validate_clamps_values():
    settings = config_module.Settings(
        client_host="  ",
        poll_interval=0.01,
        offline_retry_delay=1000,
        auto_hide_sec=0,
        overlay_theme="neon",
        overlay_opacity=2.5,
        click_through=0,
    )

    settings.validate()

    assert settings.client_host == "localhost"
    assert settings.poll_interval == 0.2
    assert settings.offline_retry_delay == 300.0
    assert settings.auto_hide_sec == 1.0
    assert settings.overlay_theme == "dark"
    assert settings.overlay_opacity == 1.0
    assert settings.click_through is False


def test_settings_validate_never_polls_server_port():
    settings = config_module.Settings(
        client_ports=[5001, "5000", 8001, 5001, "nope", 70000],
        fallback_port=8001,
    )

    settings.validate()

    assert settings.client_ports == [5001, 5000]
    assert settings.fallback_port == 5001


def test_settings_validate_restores_default_ports():
    settings = config_module.Settings(client_ports=[8001])

    settings.validate()

    assert settings.client_ports == [5001, 5000]


def test_resolve_fallback_port_prefers_env(monkeypatch):
    settings = config_module.Settings(fallback_port=5000)

    monkeypatch.delenv("GAJA_PORT", raising=False)
    assert settings.resolve_fallback_port() == 5000

    monkeypatch.setenv("GAJA_PORT", "5005")
    assert settings.resolve_fallback_port() == 5005

    monkeypatch.setenv("GAJA_PORT", "not-a-port")
    assert settings.resolve_fallback_port() == 5000

    monkeypatch.setenv("GAJA_PORT", "8001")
    assert settings.resolve_fallback_port() == 5000


def test_config_manager_loads_and_saves(config_paths):
    manager = config_module.ConfigManager()
    settings = config_module.Settings(auto_hide_sec=12.0, overlay_theme="light")
    manager.save(settings)

    assert config_paths.exists()

    loaded = manager.load()
    assert loaded.auto_hide_sec == 12.0
    assert loaded.overlay_theme == "light"


def test_config_manager_ignores_unknown_keys(config_paths):
    config_paths.parent.mkdir(parents=True, exist_ok=True)
    config_paths.write_text(
        json.dumps({"client_ports": [5002], "extra_key": "ignored"}),
        encoding="utf-8",
    )

    manager = config_module.ConfigManager()
    loaded = manager.load()

    assert loaded.client_ports == [5002]
    assert not hasattr(loaded, "extra_key")


def test_config_manager_invalid_json_returns_defaults(config_paths):
    config_paths.parent.mkdir(parents=True, exist_ok=True)
    config_paths.write_text("{invalid", encoding="utf-8")

    manager = config_module.ConfigManager()
    loaded = manager.load()

    assert loaded.client_ports == [5001, 5000]
    assert loaded.auto_hide_sec == 30.0


def test_is_wayland_from_session_type(monkeypatch):
    monkeypatch.setenv("XDG_SESSION_TYPE", "wayland")
    assert config_module.is_wayland() is True


def test_get_display_server_prefers_session_type(monkeypatch):
    monkeypatch.setenv("XDG_SESSION_TYPE", "x11")
    assert config_module.get_display_server() == "x11"


def test_get_display_server_fallbacks(monkeypatch):
    monkeypatch.delenv("XDG_SESSION_TYPE", raising=False)

    monkeypatch.setenv("WAYLAND_DISPLAY", "wayland-0")
    monkeypatch.delenv("DISPLAY", raising=False)
    assert config_module.get_display_server() == "wayland"

    monkeypatch.delenv("WAYLAND_DISPLAY", raising=False)
    monkeypatch.setenv("DISPLAY", ":0")
    assert config_module.get_display_server() == "x11"

    monkeypatch.delenv("DISPLAY", raising=False)
    assert config_module.get_display_server() == "unknown"


def test_stream_read_timeout_outlasts_connect_timeout():
    settings = config_module.Settings(stream_read_timeout=1.0)
    settings.validate()
    assert settings.stream_read_timeout == 5.0

    defaults = config_module.Settings()
    defaults.validate()
    assert defaults.stream_read_timeout > defaults.stream_timeout
