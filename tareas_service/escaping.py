"""Transforms applied to `descripcion` at the TaskStore boundary.

Descriptions are written escaped and read back unescaped, so API callers see
exactly the text they sent. The one exception is the `/desc` rendering path,
which embeds the stored (escaped) text as-is.
"""
import html


def escape_descripcion(text: str) -> str:
    """Encode `<`, `>`, `&` and both quote kinds as character references."""
    return html.escape(text, quote=True)


def unescape_descripcion(text: str) -> str:
    return html.unescape(text)
