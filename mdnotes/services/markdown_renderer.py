from __future__ import annotations

import html
import logging

import markdown as md

from mdnotes.core.sanitize import sanitize_rendered_html

log = logging.getLogger(__name__)

MD_EXTENSIONS = ("fenced_code", "tables", "toc")

BASE_CSS = """
    body { font-family: sans-serif; padding: 16px; line-height: 1.5; }
    code, pre { background: #f5f5f5; }
    pre { padding: 12px; overflow-x: auto; }
    a { text-decoration: none; }
    a:hover { text-decoration: underline; }
"""


class MarkdownRenderer:
    """Note text -> sanitized HTML. The store never parses Markdown itself."""

    def __init__(self, *, extensions: tuple[str, ...] = MD_EXTENSIONS, css: str = BASE_CSS):
        self.extensions = list(extensions)
        self.css = css

    def render_html(self, text: str) -> str:
        rendered = md.markdown(text or "", extensions=self.extensions)
        return sanitize_rendered_html(rendered)

    def render_page(self, text: str, *, title: str = "Preview") -> str:
        body = self.render_html(text)
        log.debug("Rendered preview: title=%s chars=%d", title, len(text or ""))
        return f"""\
<html>
<head>
  <meta charset="utf-8"/>
  <title>{html.escape(title)}</title>
  <style>{self.css}</style>
</head>
<body>{body}</body>
</html>
"""
