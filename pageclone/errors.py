"""Exception hierarchy for capture and generation failures."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


class CloneError(RuntimeError):
    """Base class for errors raised by the cloner."""


class NavigationError(CloneError):
    """The renderer could not load the page or capture a snapshot."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to capture {url}: {reason}")
        self.url = url
        self.reason = reason


class ProviderError(CloneError):
    """A completion call failed (transport, auth, rate limit, empty output)."""


class MalformedOutput(CloneError):
    """Provider text held no extractable JSON object, or it did not parse."""


class InvalidAssetShape(CloneError):
    """The JSON payload parsed but lacked one or more required string fields."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing: Tuple[str, ...] = tuple(missing)
        super().__init__(
            "Model output must include html, css, and js strings "
            f"(invalid: {', '.join(self.missing)})"
        )


class GenerationFailed(CloneError):
    """A generation or refinement pass failed; the cause is kept for diagnostics."""

    def __init__(self, pass_index: int, cause: BaseException) -> None:
        stage = "initial generation" if pass_index == 0 else f"refinement pass {pass_index}"
        super().__init__(f"{stage} failed: {cause}")
        self.pass_index = pass_index
        self.cause: Optional[BaseException] = cause
