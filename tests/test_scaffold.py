"""Tests for the placeholder scaffold."""

from pageclone.normalize import normalize_assets
from pageclone.scaffold import SCAFFOLD_SCRIPT, SCAFFOLD_STYLE, build_scaffold


class TestBuildScaffold:
    def test_is_deterministic(self):
        first = build_scaffold("https://example.com", "../screenshot.png")
        second = build_scaffold("https://example.com", "../screenshot.png")
        assert first == second

    def test_references_sibling_assets_and_snapshot(self):
        bundle = build_scaffold("https://example.com", "../screenshot.png")
        assert '<link rel="stylesheet" href="styles.css" />' in bundle.markup
        assert '<script src="script.js"></script>' in bundle.markup
        assert '<img src="../screenshot.png"' in bundle.markup
        assert bundle.style == SCAFFOLD_STYLE
        assert bundle.script == SCAFFOLD_SCRIPT

    def test_url_is_escaped_in_title(self):
        bundle = build_scaffold('https://example.com/?q=<b>&x="1"', "shot.png")
        assert "<title>Clone of https://example.com/?q=&lt;b&gt;&amp;x=&quot;1&quot;</title>" in bundle.markup
        assert "<b>" not in bundle.markup

    def test_is_already_normalized(self):
        bundle = build_scaffold("https://example.com", "../screenshot.png")
        assert normalize_assets(bundle) == bundle

    def test_is_a_complete_document(self):
        markup = build_scaffold("https://example.com", "x.png").markup
        assert markup.startswith("<!doctype html>")
        assert markup.rstrip().endswith("</html>")
