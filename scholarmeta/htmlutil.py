from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup
from markupsafe import escape

from .textutil import as_str


def lang_code(locale: Any) -> str:
    """Two-letter language code of a locale ("en_US" -> "en")."""
    return as_str(locale)[:2]


def strip_markup(html: Any) -> str:
    """
    Plain text of an HTML fragment.
    Tags are dropped, text is kept as-is (no separator is inserted), entities decoded.

    Entities are decoded here and escaped again by `meta_tag`, so "&amp;" comes
    out once as "&amp;". A strip_tags then htmlspecialchars pipeline leaves
    entities encoded and yields "&amp;amp;"; this differs from it on purpose.
    """
    s = as_str(html)
    if not s:
        return ""
    soup = BeautifulSoup(s, "html.parser")
    return soup.get_text()


def meta_tag(
    name: str, content: Any, *, lang: str | None = None, escape_content: bool = True
) -> str:
    """
    Render one `<meta>` element.

    - name/lang are always escaped
    - content is escaped unless escape_content=False (host-built URLs)
    """
    value = as_str(content)
    if escape_content:
        value = str(escape(value))
    attrs = f'name="{escape(name)}"'
    if lang is not None:
        attrs += f' xml:lang="{escape(lang)}"'
    return f'<meta {attrs} content="{value}"/>'
