"""Plain-text helpers for comment summaries."""

import re

from bs4 import BeautifulSoup

WHITESPACE_RE = re.compile(r"\s+")
ELLIPSIS = "..."


def strip_tags_keep_images(html: str, image_placeholder: str) -> str:
    """Drop all markup from ``html`` except inline images.

    Each ``<img>`` is replaced by ``image_placeholder`` so the summary still
    signals that the comment contained a picture. Entities are decoded.
    """
    soup = BeautifulSoup(html, "html.parser")
    for img in soup.find_all("img"):
        img.replace_with(f" {image_placeholder} ")
    return soup.get_text()


def normalize_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def shorten_text(text: str, length: int) -> str:
    """Truncate ``text`` at a word boundary to at most ``length`` characters.

    ``...`` is appended only when something was cut off. A single word longer
    than ``length`` is cut mid-word.
    """
    if len(text) <= length:
        return text

    cut = text[:length]
    boundary = cut.rfind(" ")
    if boundary > 0:
        cut = cut[:boundary]
    return cut.rstrip(" .,;:") + ELLIPSIS


def summarize_html(html: str, length: int, image_placeholder: str) -> str:
    """Build the one-line summary of a rich-text comment body."""
    text = strip_tags_keep_images(html, image_placeholder)
    return shorten_text(normalize_whitespace(text), length)
