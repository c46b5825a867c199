"""
md-preview: sanitized HTML previews for constrained markdown.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-preview notes.md --mobile

Library Usage:
    from md_preview import RenderConfig, render_markdown

    html = render_markdown("# Title\\n\\n- one\\n- two", RenderConfig(is_slideshow=True))
"""

from .clipboard import ClipboardCopier
from .config import ConfigError, RenderConfig
from .exceptions import InputTooLargeError, RenderError, RenderFileError
from .inline import InlineTransformer
from .models import DisplayMode
from .renderer import render_file, render_markdown
from .router import AnchorClick, ClickRouter, RouteAction
from .security import is_valid_image_url, is_valid_link_url
from .slugify import generate_anchor_id

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "render_markdown",
    "render_file",
    "InlineTransformer",
    "generate_anchor_id",
    # Configuration
    "RenderConfig",
    "DisplayMode",
    # Consumer-side helpers
    "ClickRouter",
    "AnchorClick",
    "RouteAction",
    "ClipboardCopier",
    # Utilities
    "is_valid_link_url",
    "is_valid_image_url",
    # Exceptions
    "ConfigError",
    "RenderError",
    "RenderFileError",
    "InputTooLargeError",
    # Version
    "__version__",
]
