"""Completion providers that turn a screenshot request into raw model text."""

from __future__ import annotations

import asyncio
import io
import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Protocol, cast

from openai import AsyncOpenAI, OpenAIError

from .config import DEFAULT_MLX_MODEL_ID
from .errors import ProviderError
from .models import GenerationRequest

logger = logging.getLogger("pageclone")


class CompletionProvider(Protocol):
    """Anything that can answer a generation request with free-form text."""

    async def complete(self, request: GenerationRequest) -> str:
        ...


def extract_output_text(response: Any) -> str:
    """Collect the text parts of a Responses API result."""
    output_text = getattr(response, "output_text", None)
    if output_text:
        return output_text

    chunks: List[str] = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                chunks.append(getattr(content, "text", None) or "")
    return "\n".join(chunks).strip()


class OpenAIProvider:
    """Vision-capable completion through the OpenAI Responses API."""

    def __init__(self, api_key: str, client: Optional[AsyncOpenAI] = None) -> None:
        # Retries are left to the caller; a failed call ends the generation attempt.
        self._client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    def _build_input(self, request: GenerationRequest) -> List[dict]:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": request.instructions},
                    {
                        "type": "input_image",
                        "image_url": request.image.data_url,
                        "detail": "high",
                    },
                ],
            }
        ]

    async def complete(self, request: GenerationRequest) -> str:
        logger.debug(
            "Requesting %s from %s (pass %d)",
            "refinement" if request.is_refinement else "generation",
            request.model,
            request.pass_index,
        )
        try:
            response = await self._client.responses.create(
                model=request.model,
                input=self._build_input(request),
                temperature=request.temperature,
            )
        except OpenAIError as exc:
            raise ProviderError(f"OpenAI request failed: {exc}") from exc

        output_text = extract_output_text(response)
        if not output_text:
            raise ProviderError("No model output returned.")
        return output_text


class MLXVisionProvider:
    """Local completion backed by an MLX vision-language model."""

    # Weights, tokenizer and image processor files; skips other framework formats.
    _VISION_FILES = [
        "*.json",
        "*.safetensors",
        "*.py",
        "*.model",
        "*.tiktoken",
        "*.txt",
        "*.jinja",
    ]

    def __init__(self, model_id: str = DEFAULT_MLX_MODEL_ID, max_tokens: int = 8192) -> None:
        self.model_id = model_id
        self.max_tokens = max_tokens
        self._model: Any = None
        self._processor: Any = None
        self._config: Any = None
        self._model_path: Optional[str] = None

    def _local_model_dir(self) -> Optional[Path]:
        """MODEL_DIR wins over the model id; an id that is a directory is used as is."""
        override = os.getenv("MODEL_DIR")
        if override:
            override_path = Path(override).expanduser()
            if override_path.exists():
                return override_path
            logger.warning(
                "Ignoring MODEL_DIR=%s for the mlx clone provider: path does not exist",
                override_path,
            )
        candidate = Path(self.model_id).expanduser()
        return candidate if candidate.exists() else None

    def _fetch_model(self) -> Path:
        from huggingface_hub import snapshot_download

        try:
            return Path(
                snapshot_download(
                    self.model_id,
                    local_files_only=True,
                    allow_patterns=self._VISION_FILES,
                )
            )
        except Exception as err:  # pylint: disable=broad-except
            logger.info("Vision model %s is not cached (%s); downloading", self.model_id, err)
        return Path(snapshot_download(self.model_id, allow_patterns=self._VISION_FILES))

    def _determine_load_target(self) -> str:
        if self._model_path is None:
            local_dir = self._local_model_dir()
            self._model_path = str(local_dir if local_dir else self._fetch_model())
            logger.debug("mlx clone provider resolved %s to %s", self.model_id, self._model_path)
        return self._model_path

    def _ensure_model(self) -> None:
        if self._model is not None and self._processor is not None:
            return
        from mlx_vlm import load as load_vlm_model

        load_target = self._determine_load_target()
        logger.info("Loading vision model %s", load_target)
        self._model, self._processor = load_vlm_model(load_target)
        self._config = getattr(self._model, "config", None)
        if self._config is None:
            raise RuntimeError("Loaded vision model does not expose configuration")

    def _generate(self, request: GenerationRequest) -> str:
        from mlx_vlm import generate as generate_text
        from mlx_vlm.prompt_utils import apply_chat_template
        from PIL import Image

        self._ensure_model()
        formatted_prompt = cast(
            str,
            apply_chat_template(
                self._processor,
                self._config,
                request.instructions,
                num_images=1,
            ),
        )
        with Image.open(io.BytesIO(request.image.data)) as raw_image:
            image = raw_image.convert("RGB")
        result = generate_text(
            self._model,
            self._processor,
            formatted_prompt,
            image=[image],
            temperature=request.temperature,
            max_tokens=self.max_tokens,
            verbose=False,
        )
        return result.text.strip()

    async def complete(self, request: GenerationRequest) -> str:
        try:
            output_text = await asyncio.to_thread(self._generate, request)
        except ImportError as exc:
            raise ProviderError(
                "The mlx provider requires the optional 'mlx' extra. "
                "Install it with 'pip install pageclone[mlx]'."
            ) from exc
        except Exception as exc:  # pylint: disable=broad-except
            raise ProviderError(f"MLX generation failed: {exc}") from exc
        if not output_text:
            raise ProviderError("No model output returned.")
        return output_text


def create_provider(
    name: str,
    api_key: Optional[str] = None,
    model_id: Optional[str] = None,
    max_tokens: int = 8192,
) -> CompletionProvider:
    """Build the provider selected on the command line."""
    if name == "openai":
        if not api_key:
            raise ValueError("The openai provider requires an API key")
        return OpenAIProvider(api_key)
    if name == "mlx":
        return MLXVisionProvider(model_id or DEFAULT_MLX_MODEL_ID, max_tokens)
    raise ValueError(f"Unknown provider: {name}")
