"""Tests for WorldSettings environment loading."""

from ringecs import World, WorldSettings


def test_defaults():
    settings = WorldSettings()
    assert settings.notify is True
    assert settings.copy_on_read is True
    assert settings.strict_names is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("RINGECS_NOTIFY", "false")
    monkeypatch.setenv("RINGECS_STRICT_NAMES", "0")
    settings = WorldSettings()
    assert settings.notify is False
    assert settings.strict_names is False
    assert settings.copy_on_read is True


def test_explicit_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("RINGECS_NOTIFY", "false")
    assert WorldSettings(notify=True).notify is True


def test_world_reads_environment_when_no_settings_given(monkeypatch, recorder):
    monkeypatch.setenv("RINGECS_NOTIFY", "false")
    world = World()
    world.subscribe("#.+", recorder)
    world.create_entity()
    assert recorder.calls == []
