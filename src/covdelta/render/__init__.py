from .markdown import format_delta_comment, format_markdown
from .render import RenderOptions, render

__all__ = ["RenderOptions", "format_delta_comment", "format_markdown", "render"]
