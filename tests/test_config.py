"""Tests for configuration loading and persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from refiner.config import (
    RefinerConfig,
    load_config,
    reset_config,
    save_config,
)
from refiner.exceptions import ConfigError
from refiner.models import OutputDestination, PromptFlavor, PromptType


@pytest.fixture(autouse=True)
def _clean_key_env(monkeypatch):
    for var in (
        "OPENAI_API_KEY",
        "CLAUDE_API_KEY",
        "ANTHROPIC_API_KEY",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_defaults(self):
        cfg = RefinerConfig()
        assert cfg.default_model == "openai:gpt-4o-mini"
        assert cfg.default_type is PromptType.GENERATIVE
        assert cfg.default_output is OutputDestination.CLIPBOARD
        assert cfg.default_flavor is PromptFlavor.DETAILED
        assert cfg.temperature.generative == 0.7
        assert cfg.temperature.reasoning == 0.2
        assert cfg.streaming.enabled is False
        assert cfg.streaming.thinking_budget_tokens == 10000
        assert cfg.max_output_tokens == 16000

    def test_get_temperature(self):
        cfg = RefinerConfig()
        assert cfg.get_temperature("generative") == 0.7
        assert cfg.get_temperature(PromptType.REASONING) == 0.2


class TestApiKeys:
    def test_stored_key_wins(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env-0000000000")
        cfg = RefinerConfig(api_key="sk-stored-000000000000")
        assert cfg.get_api_key("openai") == "sk-stored-000000000000"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env-0000000000")
        assert RefinerConfig().get_api_key("openai") == "sk-from-env-0000000000"

    def test_anthropic_alias(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "claude-key")
        assert RefinerConfig().get_api_key("anthropic") == "claude-key"

    def test_claude_var_preferred(self, monkeypatch):
        monkeypatch.setenv("CLAUDE_API_KEY", "primary")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "secondary")
        assert RefinerConfig().get_api_key("anthropic") == "primary"

    def test_google_alias(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "gem-key")
        assert RefinerConfig().get_api_key("google") == "gem-key"

    def test_missing_key_is_empty(self):
        assert RefinerConfig().get_api_key("google") == ""
        assert RefinerConfig().get_api_key("unknown") == ""


class TestLoadSave:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        cfg = load_config(tmp_path / "nope.yaml")
        assert cfg == RefinerConfig()

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == RefinerConfig()

    def test_round_trip(self, tmp_path: Path):
        path = tmp_path / "sub" / "config.yaml"
        cfg = RefinerConfig(
            default_model="gemini:flash",
            default_type=PromptType.REASONING,
            default_flavor=PromptFlavor.COMPACT,
            gemini_api_key="gem",
        )
        cfg.temperature.reasoning = 0.1
        written = save_config(cfg, path)
        assert written == path
        assert path.exists()

        loaded = load_config(path)
        assert loaded.default_model == "gemini:flash"
        assert loaded.default_type is PromptType.REASONING
        assert loaded.default_flavor is PromptFlavor.COMPACT
        assert loaded.gemini_api_key == "gem"
        assert loaded.temperature.reasoning == 0.1

    def test_saved_yaml_uses_plain_values(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        save_config(RefinerConfig(), path)
        text = path.read_text()
        assert "default_type: generative" in text
        assert "!!python" not in text

    def test_env_interpolation(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MY_KEY", "sk-interpolated-0000000")
        path = tmp_path / "config.yaml"
        path.write_text("api_key: ${MY_KEY}\n")
        assert load_config(path).api_key == "sk-interpolated-0000000"

    def test_save_keeps_env_reference(self, tmp_path: Path, monkeypatch):
        secret = "sk-secretsecretsecret123"
        monkeypatch.setenv("MY_KEY", secret)
        path = tmp_path / "config.yaml"
        path.write_text("api_key: ${MY_KEY}\ndefault_model: gemini:flash\n")

        cfg = load_config(path)
        cfg.default_flavor = PromptFlavor.COMPACT
        save_config(cfg, path)

        text = path.read_text()
        assert "${MY_KEY}" in text
        assert secret not in text
        reloaded = load_config(path)
        assert reloaded.api_key == secret
        assert reloaded.default_flavor is PromptFlavor.COMPACT

    def test_save_writes_changed_value_over_reference(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MY_KEY", "sk-fromenvironment000000")
        path = tmp_path / "config.yaml"
        path.write_text("api_key: ${MY_KEY}\n")

        cfg = load_config(path)
        cfg.api_key = "sk-typedbytheuser0000000"
        save_config(cfg, path)

        text = path.read_text()
        assert "${MY_KEY}" not in text
        assert "sk-typedbytheuser0000000" in text

    def test_save_keeps_nested_reference(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("GEN_TEMP", "0.9")
        path = tmp_path / "config.yaml"
        path.write_text("temperature:\n  generative: ${GEN_TEMP}\n")

        save_config(load_config(path), path)

        assert "${GEN_TEMP}" in path.read_text()
        assert load_config(path).temperature.generative == 0.9

    def test_partial_file_keeps_defaults(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("temperature:\n  generative: 0.9\n")
        cfg = load_config(path)
        assert cfg.temperature.generative == 0.9
        assert cfg.temperature.reasoning == 0.2

    def test_invalid_yaml_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("default_model: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_non_mapping_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_value_raises(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("default_type: poetic\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_reset(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        save_config(RefinerConfig(default_model="gemini:flash"), path)
        reset_config(path)
        assert not path.exists()
        assert load_config(path) == RefinerConfig()

    def test_reset_missing_file_is_noop(self, tmp_path: Path):
        reset_config(tmp_path / "absent.yaml")
