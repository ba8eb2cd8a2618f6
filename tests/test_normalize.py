"""Tests for cross-referencing the generated assets."""

import pytest

from pageclone.models import AssetBundle
from pageclone.normalize import (
    SCRIPT_TAG,
    STYLE_LINK,
    inject_before_body_close,
    inject_into_head,
    normalize_assets,
)

SAMPLES = [
    "",
    "<p>fragment</p>",
    "<html><head></head><body></body></html>",
    "<html><body><p>hi</p></body></html>",
    "<HTML><HEAD><TITLE>x</TITLE></HEAD><BODY></BODY></HTML>",
    '<html><head><link href="STYLES.CSS" rel="stylesheet"></head><body></body></html>',
    '<html><head></head><body><script src="./script.js"></script></body></html>',
]


def bundle(markup: str) -> AssetBundle:
    return AssetBundle(markup=markup, style="body{margin:0}", script="console.log(1)")


class TestInjection:
    def test_head_and_body_tags_receive_references(self):
        result = normalize_assets(bundle("<html><head></head><body></body></html>"))
        assert result.markup == (
            f"<html><head>{STYLE_LINK}\n</head><body>{SCRIPT_TAG}\n</body></html>"
        )

    def test_missing_tags_prepend_and_append(self):
        result = normalize_assets(bundle("<p>fragment</p>"))
        assert result.markup == f"{STYLE_LINK}\n<p>fragment</p>\n{SCRIPT_TAG}"
        assert "styles.css" in result.markup
        assert "script.js" in result.markup

    def test_uppercase_closing_tags_are_matched(self):
        result = normalize_assets(bundle("<HTML><HEAD></HEAD><BODY></BODY></HTML>"))
        assert f"{STYLE_LINK}\n</head>" in result.markup
        assert f"{SCRIPT_TAG}\n</body>" in result.markup
        assert not result.markup.startswith(STYLE_LINK)

    def test_only_first_closing_tag_is_used(self):
        html = "<head></head><template><head></head></template>"
        assert inject_into_head(html, "X") == "<head>X\n</head><template><head></head></template>"

    def test_body_without_closing_tag_appends(self):
        assert inject_before_body_close("<body><p>", "X") == "<body><p>\nX"

    def test_only_markup_changes(self):
        original = bundle("<p>x</p>")
        result = normalize_assets(original)
        assert result.style == original.style
        assert result.script == original.script

    def test_body_only_document_gets_prepended_link(self):
        result = normalize_assets(bundle("<html><body><p>hi</p></body></html>"))
        assert result.markup.startswith(f"{STYLE_LINK}\n<html>")
        assert result.markup.endswith(f"{SCRIPT_TAG}\n</body></html>")


class TestExistingReferences:
    def test_existing_references_are_byte_identical(self):
        html = (
            '<html><head><link rel="stylesheet" href="styles.css"></head>'
            '<body><script src="script.js" defer></script></body></html>'
        )
        original = bundle(html)
        assert normalize_assets(original).markup == html

    def test_reference_check_is_case_insensitive(self):
        html = '<html><head><link href="STYLES.CSS"></head><body><script src="Script.JS"></script></body></html>'
        assert normalize_assets(bundle(html)).markup == html

    def test_only_missing_reference_is_added(self):
        html = '<html><head><link href="styles.css"></head><body></body></html>'
        result = normalize_assets(bundle(html)).markup
        assert result.count("styles.css") == 1
        assert result.count("script.js") == 1

    def test_similar_filename_does_not_count(self):
        html = '<html><head><link href="mystyles.css"></head><body></body></html>'
        result = normalize_assets(bundle(html)).markup
        assert STYLE_LINK in result


class TestIdempotence:
    @pytest.mark.parametrize("markup", SAMPLES)
    def test_normalizing_twice_changes_nothing(self, markup):
        once = normalize_assets(bundle(markup))
        assert normalize_assets(once) == once
