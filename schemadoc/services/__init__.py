"""Services for SchemaDoc."""

from .metadata_reader import MetadataReader, get_reader
from .markdown_renderer import MarkdownRenderer, render_markdown

__all__ = ["MetadataReader", "get_reader", "MarkdownRenderer", "render_markdown"]
