"""Unit tests for comment summary helpers."""

from commentarea.util.text import normalize_whitespace, shorten_text, summarize_html


class TestSummarizeHtml:
    """Tests for summarize_html."""

    def test_strips_markup(self):
        assert summarize_html("<p>Hello <b>world</b></p>", 160, "[image]") == (
            "Hello world"
        )

    def test_replaces_images_with_placeholder(self):
        html = '<p>Look<img src="cell.png" alt="cell">here</p>'

        result = summarize_html(html, 160, "[image]")

        assert result == "Look [image] here"

    def test_decodes_entities(self):
        assert summarize_html("<p>Fish &amp; chips</p>", 160, "[image]") == (
            "Fish & chips"
        )

    def test_collapses_whitespace_across_blocks(self):
        html = "<p>First   line</p>\n\n<p>\tSecond line</p>"

        assert summarize_html(html, 160, "[image]") == "First line Second line"

    def test_truncates_long_text_with_ellipsis(self):
        html = "<p>" + "word " * 100 + "</p>"

        result = summarize_html(html, 160, "[image]")

        assert result.endswith("...")
        assert len(result) <= 160 + len("...")


class TestShortenText:
    """Tests for shorten_text."""

    def test_short_text_is_unchanged(self):
        assert shorten_text("abc", 3) == "abc"

    def test_cuts_at_word_boundary(self):
        assert shorten_text("one two three four", 9) == "one two..."

    def test_single_long_word_is_cut_mid_word(self):
        assert shorten_text("abcdefghij", 4) == "abcd..."


def test_normalize_whitespace():
    assert normalize_whitespace("  a \n\t b ") == "a b"
