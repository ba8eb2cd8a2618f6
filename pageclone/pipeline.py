"""Generate-then-refine loop that turns a snapshot into a page clone."""

from __future__ import annotations

import logging
import time

from .config import GENERATION_TEMPERATURE
from .errors import GenerationFailed, InvalidAssetShape, MalformedOutput, ProviderError
from .images import encode_snapshot
from .models import (
    AssetBundle,
    EncodedImage,
    GenerationOutcome,
    GenerationRequest,
    PipelineConfig,
)
from .normalize import normalize_assets
from .parsing import parse_assets
from .providers import CompletionProvider

logger = logging.getLogger("pageclone.pipeline")

_PASS_ERRORS = (OSError, ProviderError, MalformedOutput, InvalidAssetShape)


def build_initial_request(config: PipelineConfig, image: EncodedImage) -> GenerationRequest:
    instructions = "\n".join(
        [
            "You are rebuilding a static webpage based on the screenshot.",
            "Return ONLY valid JSON with keys: html, css, js.",
            "- html must be a complete document.",
            "- css should be scoped to the generated markup.",
            "- js can be empty if not needed.",
            f"Website URL: {config.url}",
        ]
    )
    return GenerationRequest(
        instructions=instructions,
        image=image,
        url=config.url,
        model=config.model,
        temperature=GENERATION_TEMPERATURE,
    )


def build_refinement_request(
    config: PipelineConfig,
    image: EncodedImage,
    prior: AssetBundle,
    pass_index: int,
) -> GenerationRequest:
    total = config.refine_passes
    instructions = "\n".join(
        [
            "You are refining a static webpage clone based on the screenshot.",
            "Return ONLY valid JSON with keys: html, css, js.",
            "Keep existing structure when possible, but fix layout, spacing, "
            "and typography to better match the screenshot.",
            f"This is refinement pass {pass_index} of {total}.",
            f"Website URL: {config.url}",
            "Current assets JSON:",
            prior.to_json(),
        ]
    )
    return GenerationRequest(
        instructions=instructions,
        image=image,
        url=config.url,
        model=config.model,
        temperature=GENERATION_TEMPERATURE,
        prior=prior,
        pass_index=pass_index,
        total_passes=total,
    )


async def run_pass(provider: CompletionProvider, request: GenerationRequest) -> AssetBundle:
    """Invoke the provider once and validate what it returned."""
    start = time.perf_counter()
    output_text = await provider.complete(request)
    bundle = parse_assets(output_text)
    logger.debug(
        "Pass %d produced %d/%d/%d chars of html/css/js in %.2fs",
        request.pass_index,
        len(bundle.markup),
        len(bundle.style),
        len(bundle.script),
        time.perf_counter() - start,
    )
    return bundle


async def run_pipeline(config: PipelineConfig, provider: CompletionProvider) -> GenerationOutcome:
    """Run the initial pass and every refinement pass in order.

    The first failing pass ends the run; earlier bundles are discarded so the
    caller either gets the normalized result of the last pass or a
    ``GenerationFailed`` to fall back on.
    """
    outcome = GenerationOutcome()
    if not config.ai_enabled:
        cause = ProviderError("Model generation is disabled.")
        outcome.failure = GenerationFailed(0, cause)
        outcome.failure.__cause__ = cause
        return outcome

    pass_index = 0
    try:
        image = encode_snapshot(config.snapshot_path, config.max_image_side)
        outcome.provider_calls += 1
        bundle = await run_pass(provider, build_initial_request(config, image))
        for pass_index in range(1, config.refine_passes + 1):
            logger.info("Refinement pass %d of %d", pass_index, config.refine_passes)
            request = build_refinement_request(config, image, bundle, pass_index)
            outcome.provider_calls += 1
            bundle = await run_pass(provider, request)
    except _PASS_ERRORS as exc:
        outcome.failure = GenerationFailed(pass_index, exc)
        outcome.failure.__cause__ = exc
        return outcome

    outcome.bundle = normalize_assets(bundle)
    return outcome
