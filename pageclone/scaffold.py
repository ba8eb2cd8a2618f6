"""Placeholder clone used whenever model generation is off or fails."""

from __future__ import annotations

import html

from .config import SCRIPT_FILENAME, STYLE_FILENAME
from .models import AssetBundle

SCAFFOLD_STYLE = """:root {
  color-scheme: light;
  font-family: "Iosevka", "JetBrains Mono", monospace;
  background: #f5f0e9;
  color: #1f1b16;
}

* {
  box-sizing: border-box;
}

body {
  margin: 0;
  min-height: 100vh;
  display: grid;
  place-items: center;
}

.stage {
  width: min(1200px, 92vw);
  display: grid;
  gap: 2rem;
  grid-template-columns: repeat(auto-fit, minmax(280px, 1fr));
  align-items: start;
}

.frame {
  border: 2px solid #1f1b16;
  background: #fff9f0;
  padding: 1rem;
  box-shadow: 12px 12px 0 #e1d6c8;
}

.frame img {
  width: 100%;
  display: block;
}

.notes {
  border: 2px dashed #1f1b16;
  padding: 1.5rem;
  background: #fdf7ef;
}

.notes h1 {
  margin-top: 0;
}
"""

SCAFFOLD_SCRIPT = """// Placeholder until a model rebuilds the page.
console.log("Clone scaffold ready.");
"""


def build_scaffold(url: str, snapshot_ref: str) -> AssetBundle:
    """Return the fixed scaffold for ``url`` showing the snapshot at ``snapshot_ref``."""
    markup = f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Clone of {html.escape(url)}</title>
    <link rel="stylesheet" href="{STYLE_FILENAME}" />
  </head>
  <body>
    <main class="stage">
      <div class="frame">
        <img src="{html.escape(snapshot_ref)}" alt="Screenshot reference" />
      </div>
      <section class="notes">
        <h1>Clone scaffold</h1>
        <p>Use the screenshot as a reference to rebuild the layout.</p>
        <p>Run again with model generation enabled to produce HTML/CSS/JS from the screenshot.</p>
      </section>
    </main>
    <script src="{SCRIPT_FILENAME}"></script>
  </body>
</html>
"""
    return AssetBundle(markup=markup, style=SCAFFOLD_STYLE, script=SCAFFOLD_SCRIPT)
