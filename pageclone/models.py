"""Data models used throughout the clone pipeline."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .errors import GenerationFailed

# Keys the provider is asked to return, mapped to AssetBundle fields.
ASSET_KEYS = ("html", "css", "js")


@dataclass(frozen=True)
class AssetBundle:
    """The markup, stylesheet and script that make up a page clone."""

    markup: str
    style: str
    script: str

    def to_payload(self) -> Dict[str, str]:
        return {"html": self.markup, "css": self.style, "js": self.script}

    def to_json(self) -> str:
        """Compact JSON form fed back to the provider during refinement."""
        return json.dumps(self.to_payload(), ensure_ascii=False, separators=(",", ":"))


@dataclass(frozen=True)
class EncodedImage:
    """Snapshot bytes prepared for a provider request."""

    data: bytes
    mime_type: str

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"


@dataclass(frozen=True)
class GenerationRequest:
    """Everything a provider needs for a single generation or refinement call."""

    instructions: str
    image: EncodedImage
    url: str
    model: str
    temperature: float
    prior: Optional[AssetBundle] = None
    pass_index: int = 0
    total_passes: int = 0

    @property
    def is_refinement(self) -> bool:
        return self.prior is not None


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable parameters for one generate-then-refine run."""

    credential: Optional[str]
    model: str
    url: str
    snapshot_path: Path
    refine_passes: int = 0
    ai_enabled: bool = True
    max_image_side: int = 2048

    def __post_init__(self) -> None:
        if self.refine_passes < 0:
            raise ValueError("refine_passes must be zero or greater")


@dataclass
class GenerationOutcome:
    """Result of the pipeline: a normalized bundle or the failure that stopped it."""

    bundle: Optional[AssetBundle] = None
    failure: Optional[GenerationFailed] = None
    provider_calls: int = 0

    @property
    def succeeded(self) -> bool:
        return self.bundle is not None and self.failure is None

    def unwrap(self) -> AssetBundle:
        if self.failure is not None:
            raise self.failure
        if self.bundle is None:
            raise RuntimeError("Generation outcome holds neither a bundle nor a failure")
        return self.bundle


@dataclass
class CloneResult:
    """Summary of a processed URL."""

    url: str
    snapshot_path: Path
    clone_dir: Path
    mode: str
    provider_calls: int
    total_seconds: float
    failure: Optional[str] = None
