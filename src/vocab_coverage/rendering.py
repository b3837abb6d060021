from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import List

from .models import Classification, Document, Paragraph, Token

LOGGER = logging.getLogger(__name__)

STYLESHEET_SUFFIX = ".css"

DEFAULT_STYLESHEET = """
body {font-family: sans-serif; line-height: 1.5;}
span.KNOWN {font-weight: normal; font-style: normal; border-bottom: 3px solid green;}
span.MAYBE {font-weight: normal; font-style: normal; border-bottom: 3px solid yellowgreen;}
sup.count {color: gray; font-size: 0.6em;}
"""


def render_html(document: Document, stylesheet: str | None = None) -> str:
    """
    Render a classified document as a self-contained HTML page.

    Non-word text is reproduced as-is (only HTML-escaped); every word becomes
    a span whose class is its classification name. Unknown words also show
    how often they occur in the file.
    """
    style = stylesheet if stylesheet is not None else DEFAULT_STYLESHEET
    parts: List[str] = [
        "<!DOCTYPE html>",
        "<html><head><meta charset='utf-8'>",
        f"<title>{escape(document.name)}</title>",
        f"<style>{style}</style>",
        "</head><body><article>",
    ]
    parts.extend(_render_paragraph(paragraph) for paragraph in document.paragraphs)
    parts.append("</article></body></html>")
    return "".join(parts)


def load_stylesheet(path: str | Path | None) -> str | None:
    """Return the stylesheet text, or None when no file exists at ``path``."""
    if path is None:
        return None
    path = Path(path)
    if not path.is_file():
        LOGGER.debug("No stylesheet at %s, using the default", path)
        return None
    return path.read_text(encoding="utf-8")


def _render_paragraph(paragraph: Paragraph) -> str:
    return "<p>" + "".join(_render_token(token) for token in paragraph.tokens) + "</p>"


def _render_token(token: Token) -> str:
    text = escape(token.text, quote=False)
    if not token.is_word or token.stats is None:
        return text
    stats = token.stats
    name = stats.classification.name
    if stats.classification is Classification.UNKNOWN:
        return (
            f'<span class="{name}" data-count="{stats.count}">{text}'
            f'<sup class="count">{stats.count}</sup></span>'
        )
    return f'<span class="{name}">{text}</span>'
