"""Make generated markup pull in its sibling stylesheet and script."""

from __future__ import annotations

import dataclasses
import re

from .config import SCRIPT_FILENAME, STYLE_FILENAME
from .models import AssetBundle

STYLE_REFERENCE = re.compile(rf"\b{re.escape(STYLE_FILENAME)}\b", re.IGNORECASE)
SCRIPT_REFERENCE = re.compile(rf"\b{re.escape(SCRIPT_FILENAME)}\b", re.IGNORECASE)
HEAD_CLOSE = re.compile(r"</head>", re.IGNORECASE)
BODY_CLOSE = re.compile(r"</body>", re.IGNORECASE)

STYLE_LINK = f'<link rel="stylesheet" href="{STYLE_FILENAME}" />'
SCRIPT_TAG = f'<script src="{SCRIPT_FILENAME}"></script>'


def inject_into_head(html: str, snippet: str) -> str:
    """Insert ``snippet`` before the first ``</head>``, or prepend it."""
    if HEAD_CLOSE.search(html):
        return HEAD_CLOSE.sub(lambda _: f"{snippet}\n</head>", html, count=1)
    return f"{snippet}\n{html}"


def inject_before_body_close(html: str, snippet: str) -> str:
    """Insert ``snippet`` before the first ``</body>``, or append it."""
    if BODY_CLOSE.search(html):
        return BODY_CLOSE.sub(lambda _: f"{snippet}\n</body>", html, count=1)
    return f"{html}\n{snippet}"


def normalize_assets(bundle: AssetBundle) -> AssetBundle:
    """Reference styles.css and script.js from the markup if it does not already."""
    html = bundle.markup
    if not STYLE_REFERENCE.search(html):
        html = inject_into_head(html, STYLE_LINK)
    if not SCRIPT_REFERENCE.search(html):
        html = inject_before_body_close(html, SCRIPT_TAG)
    if html == bundle.markup:
        return bundle
    return dataclasses.replace(bundle, markup=html)
