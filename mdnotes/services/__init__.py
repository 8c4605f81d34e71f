from .listing import NoteListing
from .markdown_renderer import MarkdownRenderer

__all__ = ["NoteListing", "MarkdownRenderer"]
