"""notemark renderers.

Renderers serialize the document tree into output formats.

Available Renderers:
- HtmlRenderer: Renders the tree to sanitized HTML using StringBuilder pattern

The plain-text projection lives in notemark.text.

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from notemark.renderers.html import HtmlRenderer, render, render_html

__all__ = ["HtmlRenderer", "render", "render_html"]
