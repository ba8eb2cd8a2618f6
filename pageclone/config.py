"""Configuration objects and constants for the cloner."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_MODEL_ID = "gpt-4.1-mini"
DEFAULT_MLX_MODEL_ID = "mlx-community/Qwen2.5-VL-7B-Instruct-4bit"
DEFAULT_PROVIDER = "openai"
PROVIDERS = ("openai", "mlx")
WAIT_EVENTS = ("load", "domcontentloaded", "networkidle")

# Temperature is fixed low so refinement passes drift as little as possible.
GENERATION_TEMPERATURE = 0.2

SNAPSHOT_FILENAME = "screenshot.png"
CLONE_DIRNAME = "clone"
MARKUP_FILENAME = "index.html"
STYLE_FILENAME = "styles.css"
SCRIPT_FILENAME = "script.js"


@dataclass
class CaptureOptions:
    """Viewport and navigation settings handed to the renderer."""

    width: int = 1280
    height: int = 720
    wait_until: str = "networkidle"
    timeout_ms: int = 30_000
    full_page: bool = False


@dataclass
class CloneConfig:
    """Top-level settings that control capture and generation behaviour."""

    output_root: Path
    capture: CaptureOptions
    model_id: Optional[str] = None
    refine_passes: int = 1
    use_ai: bool = True
    provider: str = DEFAULT_PROVIDER
    api_key: Optional[str] = None
    max_image_side: int = 2048
    max_tokens: int = 8192

    @property
    def requires_credential(self) -> bool:
        return self.provider == "openai"

    @property
    def ai_enabled(self) -> bool:
        if not self.use_ai:
            return False
        if self.requires_credential:
            return bool(self.api_key)
        return True

    @property
    def snapshot_path(self) -> Path:
        return self.output_root / SNAPSHOT_FILENAME

    @property
    def clone_dir(self) -> Path:
        return self.output_root / CLONE_DIRNAME

    def __post_init__(self) -> None:
        if not self.model_id:
            self.model_id = DEFAULT_MLX_MODEL_ID if self.provider == "mlx" else DEFAULT_MODEL_ID
