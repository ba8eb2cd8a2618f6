"""Tests for configuration defaults."""

from pathlib import Path

from pageclone.config import DEFAULT_MLX_MODEL_ID, DEFAULT_MODEL_ID, CaptureOptions, CloneConfig


def make_config(**overrides):
    fields = dict(output_root=Path("out"), capture=CaptureOptions())
    fields.update(overrides)
    return CloneConfig(**fields)


class TestCloneConfig:
    def test_openai_default_model(self):
        assert make_config().model_id == DEFAULT_MODEL_ID

    def test_mlx_default_model_follows_provider(self):
        assert make_config(provider="mlx").model_id == DEFAULT_MLX_MODEL_ID

    def test_explicit_model_is_kept(self):
        assert make_config(provider="mlx", model_id="local/model").model_id == "local/model"

    def test_mlx_needs_no_credential(self):
        config = make_config(provider="mlx")
        assert not config.requires_credential
        assert config.ai_enabled

    def test_output_paths(self):
        config = make_config()
        assert config.snapshot_path == Path("out") / "screenshot.png"
        assert config.clone_dir == Path("out") / "clone"
