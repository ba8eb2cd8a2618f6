"""Turn free-form provider text into a validated asset bundle."""

from __future__ import annotations

import json

from .errors import InvalidAssetShape, MalformedOutput
from .models import ASSET_KEYS, AssetBundle


def extract_json_span(text: str) -> str:
    """Return the text between the first ``{`` and the last ``}``, inclusive.

    This is a span heuristic rather than a brace matcher: prose around the
    object is tolerated, but two separate objects are captured as one span and
    a stray brace before the real object shifts the start.
    """
    first = text.find("{")
    last = text.rfind("}")
    if first == -1 or last == -1 or last <= first:
        raise MalformedOutput("No JSON object found in model output.")
    return text[first : last + 1]


def validate_assets(payload: str) -> AssetBundle:
    """Parse a JSON payload and check it carries html, css and js strings."""
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise MalformedOutput(f"Model output is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedOutput("Invalid model output.")

    invalid = [key for key in ASSET_KEYS if not isinstance(data.get(key), str)]
    if invalid:
        raise InvalidAssetShape(invalid)
    return AssetBundle(markup=data["html"], style=data["css"], script=data["js"])


def parse_assets(text: str) -> AssetBundle:
    return validate_assets(extract_json_span(text))
