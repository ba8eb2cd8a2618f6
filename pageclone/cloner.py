"""High-level orchestration for capturing a page and writing its clone."""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Optional

from .capture import capture_snapshot
from .config import MARKUP_FILENAME, SCRIPT_FILENAME, STYLE_FILENAME, CloneConfig
from .models import AssetBundle, CloneResult, PipelineConfig
from .pipeline import run_pipeline
from .providers import CompletionProvider, create_provider
from .scaffold import build_scaffold

logger = logging.getLogger("pageclone")


def snapshot_reference(snapshot_path: Path, clone_dir: Path) -> str:
    """Path to the snapshot as seen from the clone's markup."""
    return Path(os.path.relpath(snapshot_path, clone_dir)).as_posix()


def write_bundle(clone_dir: Path, bundle: AssetBundle) -> None:
    """Persist the three clone assets under their conventional filenames."""
    clone_dir.mkdir(parents=True, exist_ok=True)
    (clone_dir / MARKUP_FILENAME).write_text(bundle.markup, encoding="utf-8")
    (clone_dir / STYLE_FILENAME).write_text(bundle.style, encoding="utf-8")
    (clone_dir / SCRIPT_FILENAME).write_text(bundle.script, encoding="utf-8")


def build_pipeline_config(url: str, config: CloneConfig) -> PipelineConfig:
    return PipelineConfig(
        credential=config.api_key,
        model=config.model_id,
        url=url,
        snapshot_path=config.snapshot_path,
        refine_passes=max(0, config.refine_passes),
        ai_enabled=config.ai_enabled,
        max_image_side=config.max_image_side,
    )


async def run_clone(
    url: str,
    config: CloneConfig,
    provider: Optional[CompletionProvider] = None,
) -> CloneResult:
    """Capture ``url``, generate its clone (or the scaffold) and write it to disk.

    ``NavigationError`` from the capture step propagates: without a snapshot
    there is nothing to clone. Any generation failure is logged and replaced
    by the scaffold.
    """
    overall_start = time.perf_counter()
    config.output_root.mkdir(parents=True, exist_ok=True)
    snapshot_path = await capture_snapshot(url, config.snapshot_path, config.capture)

    clone_dir = config.clone_dir
    clone_dir.mkdir(parents=True, exist_ok=True)

    if config.use_ai and config.requires_credential and not config.api_key:
        logger.warning("OPENAI_API_KEY is not set. Continuing without model integration.")

    bundle: Optional[AssetBundle] = None
    provider_calls = 0
    failure: Optional[str] = None
    pipeline_config = build_pipeline_config(url, config)
    if pipeline_config.ai_enabled:
        if provider is None:
            provider = create_provider(
                config.provider,
                api_key=config.api_key,
                model_id=config.model_id,
                max_tokens=config.max_tokens,
            )
        generation_start = time.perf_counter()
        outcome = await run_pipeline(pipeline_config, provider)
        provider_calls = outcome.provider_calls
        if outcome.succeeded:
            bundle = outcome.bundle
            logger.info(
                "Generated clone in %.2fs (%d provider call%s)",
                time.perf_counter() - generation_start,
                provider_calls,
                "s" if provider_calls != 1 else "",
            )
        else:
            failure = str(outcome.failure)
            logger.warning("Model generation failed, falling back to scaffold: %s", failure)

    mode = "generated"
    if bundle is None:
        mode = "scaffold"
        bundle = build_scaffold(url, snapshot_reference(snapshot_path, clone_dir))

    write_bundle(clone_dir, bundle)
    logger.info("Saved %s clone to %s", mode, clone_dir)

    return CloneResult(
        url=url,
        snapshot_path=snapshot_path,
        clone_dir=clone_dir,
        mode=mode,
        provider_calls=provider_calls,
        total_seconds=time.perf_counter() - overall_start,
        failure=failure,
    )
