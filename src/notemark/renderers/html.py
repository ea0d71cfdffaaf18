"""HTML renderer using StringBuilder pattern.

Renders the document tree to sanitized HTML for read-only display. Every
text payload and attribute value is escaped, so the output is well-formed
for any input, including notes that contain raw ``<`` or ``&``.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Single-Pass Heading Decoration:
Heading IDs are generated during the tree walk and deduplicated per render
(``plans``, ``plans-1``, ``plans-2``).
"""

import html
from dataclasses import dataclass, field

from notemark.config import get_convert_config
from notemark.nodes import Mark, Node
from notemark.parser import convert
from notemark.stringbuilder import StringBuilder
from notemark.text import extract_text
from notemark.utils.logger import get_logger
from notemark.utils.text import is_dangerous_url, slugify

logger = get_logger(__name__)

_CLOSE_TAGS = {
    "bold": "</strong>",
    "italic": "</em>",
    "code": "</code>",
    "strike": "</del>",
    "link": "</a>",
}


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes <, >, &, " but not single quotes; attribute values are always
    double-quoted.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Thread Safety:
        Each render() call creates its own RenderContext instance.
        No shared mutable state between concurrent renders.
    """

    seen_slugs: set[str] = field(default_factory=set)
    # Marks currently open in the inline run being rendered, outermost first
    open_marks: list[Mark] = field(default_factory=list)


class HtmlRenderer:
    """Render the document tree to HTML using StringBuilder pattern.

    Usage:
        >>> from notemark.parser import convert
        >>> HtmlRenderer().render(convert("# Hello **World**"))
        '<h1 id="hello-world">Hello <strong>World</strong></h1>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
    """

    __slots__ = ("_heading_ids", "_safe_urls")

    def __init__(
        self,
        *,
        heading_ids: bool | None = None,
        safe_urls: bool | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            heading_ids: Emit slug ids on headings (default from config)
            safe_urls: Drop javascript:/data:/vbscript: URLs (default from config)
        """
        config = get_convert_config()
        self._heading_ids = config.heading_ids if heading_ids is None else heading_ids
        self._safe_urls = config.safe_urls if safe_urls is None else safe_urls

    def render(self, node: Node) -> str:
        """Render a document (or any block node) to an HTML string.

        Thread Safety:
            Creates independent RenderContext per call.
        """
        ctx = RenderContext()
        sb = StringBuilder()
        if node.type == "doc":
            for child in node.children:
                self._render_block(child, sb, ctx)
        else:
            self._render_block(node, sb, ctx)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render a block node."""
        match block.type:
            case "heading":
                self._render_heading(block, sb, ctx)
            case "paragraph":
                sb.append("<p>")
                self._render_inlines(block.children, sb, ctx)
                sb.append("</p>\n")
            case "bulletList":
                self._render_list(block, sb, ctx, "<ul>\n", "</ul>\n")
            case "orderedList":
                start = block.attr("start", 1)
                open_tag = f'<ol start="{int(start)}">\n' if start != 1 else "<ol>\n"
                self._render_list(block, sb, ctx, open_tag, "</ol>\n")
            case "taskList":
                self._render_list(block, sb, ctx, '<ul class="task-list">\n', "</ul>\n")
            case "blockquote":
                sb.append("<blockquote>\n")
                for child in block.children:
                    self._render_block(child, sb, ctx)
                sb.append("</blockquote>\n")
            case "codeBlock":
                self._render_code_block(block, sb)
            case "horizontalRule":
                sb.append('<hr class="divider" />\n')
            case "table":
                self._render_table(block, sb, ctx)
            case "listItem" | "taskItem":
                # Should be rendered by its list, but handle standalone
                self._render_list_item(block, sb, ctx)
            case "text" | "image":
                self._render_inlines((block,), sb, ctx)

    def _render_heading(self, heading: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render heading with ID for anchoring."""
        level = min(max(int(heading.attr("level", 1)), 1), 6)
        id_attr = ""
        if self._heading_ids:
            slug = slugify(extract_text(heading))
            if slug:
                # Ensure unique slug
                original_slug = slug
                counter = 1
                while slug in ctx.seen_slugs:
                    slug = f"{original_slug}-{counter}"
                    counter += 1
                ctx.seen_slugs.add(slug)
                id_attr = f' id="{html_escape(slug)}"'

        sb.append(f"<h{level}{id_attr}>")
        self._render_inlines(heading.children, sb, ctx)
        sb.append(f"</h{level}>\n")

    def _render_list(
        self,
        lst: Node,
        sb: StringBuilder,
        ctx: RenderContext,
        open_tag: str,
        close_tag: str,
    ) -> None:
        sb.append(open_tag)
        for item in lst.children:
            self._render_list_item(item, sb, ctx)
        sb.append(close_tag)

    def _render_list_item(self, item: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render list item.

        Items hold a single paragraph, which renders as bare inline content.
        """
        if item.type == "taskItem":
            if item.attr("checked", False):
                sb.append('<li class="task-item checked"><input type="checkbox" checked disabled /> ')
            else:
                sb.append('<li class="task-item"><input type="checkbox" disabled /> ')
        else:
            sb.append("<li>")

        for child in item.children:
            if child.type == "paragraph":
                self._render_inlines(child.children, sb, ctx)
            else:
                self._render_block(child, sb, ctx)

        sb.append("</li>\n")

    def _render_code_block(self, code: Node, sb: StringBuilder) -> None:
        """Render fenced code block."""
        language = code.attr("language") or get_convert_config().default_language
        content = "".join(child.text or "" for child in code.children)
        sb.append(f'<pre class="code-block"><code class="language-{html_escape(language)}">')
        sb.append(html_escape(content))
        sb.append("</code></pre>\n")

    def _render_table(self, table: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render table; rows of header cells go in <thead>."""
        head = [row for row in table.children if _is_header_row(row)]
        body = [row for row in table.children if not _is_header_row(row)]

        sb.append('<table class="markdown-table">\n')
        if head:
            sb.append("<thead>\n")
            for row in head:
                self._render_table_row(row, sb, ctx)
            sb.append("</thead>\n")
        if body:
            sb.append("<tbody>\n")
            for row in body:
                self._render_table_row(row, sb, ctx)
            sb.append("</tbody>\n")
        sb.append("</table>\n")

    def _render_table_row(self, row: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        sb.append("<tr>")
        for cell in row.children:
            tag = "th" if cell.type == "tableHeaderCell" else "td"
            sb.append(f"<{tag}>")
            for child in cell.children:
                if child.type == "paragraph":
                    self._render_inlines(child.children, sb, ctx)
                else:
                    self._render_block(child, sb, ctx)
            sb.append(f"</{tag}>")
        sb.append("</tr>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(
        self, runs: tuple[Node, ...], sb: StringBuilder, ctx: RenderContext
    ) -> None:
        """Render inline runs.

        Adjacent runs that share an outer mark prefix share the open tags:
        ``**a *b***`` renders as ``<strong>a <em>b</em></strong>``.
        """
        stack = ctx.open_marks
        for run in runs:
            match run.type:
                case "text":
                    marks = [m for m in run.marks if self._keep_mark(m)]
                    self._sync_marks(stack, marks, sb)
                    sb.append(html_escape(run.text or "").replace("\n", "<br />\n"))
                case "image":
                    self._sync_marks(stack, [], sb)
                    self._render_image(run, sb)
        self._sync_marks(stack, [], sb)

    def _sync_marks(self, stack: list[Mark], marks: list[Mark], sb: StringBuilder) -> None:
        """Close marks beyond the common prefix, then open the rest."""
        common = 0
        while common < len(stack) and common < len(marks) and stack[common] == marks[common]:
            common += 1
        while len(stack) > common:
            sb.append(_CLOSE_TAGS[stack.pop().type])
        for mark in marks[common:]:
            sb.append(self._open_tag(mark))
            stack.append(mark)

    def _open_tag(self, mark: Mark) -> str:
        match mark.type:
            case "bold":
                return "<strong>"
            case "italic":
                return "<em>"
            case "code":
                return '<code class="inline-code">'
            case "strike":
                return "<del>"
            case "link":
                href = str((mark.attrs or {}).get("href", ""))
                if href.startswith("#"):
                    return f'<a href="{html_escape(href)}" class="wiki-link">'
                return f'<a href="{html_escape(href)}" target="_blank" rel="noopener">'
        return ""

    def _keep_mark(self, mark: Mark) -> bool:
        """Drop link marks pointing at unsafe URLs; their text is kept."""
        if mark.type not in _CLOSE_TAGS:
            return False
        if mark.type != "link" or not self._safe_urls:
            return True
        href = str((mark.attrs or {}).get("href", ""))
        if is_dangerous_url(href):
            logger.debug("Dropping link with unsafe URL %r", href)
            return False
        return True

    def _render_image(self, image: Node, sb: StringBuilder) -> None:
        src = str(image.attr("src", ""))
        alt = str(image.attr("alt", ""))
        if self._safe_urls and is_dangerous_url(src):
            logger.debug("Dropping image with unsafe URL %r", src)
            sb.append(html_escape(alt))
            return
        sb.append(
            f'<img src="{html_escape(src)}" alt="{html_escape(alt)}" class="markdown-image" />'
        )


def _is_header_row(row: Node) -> bool:
    return bool(row.children) and all(c.type == "tableHeaderCell" for c in row.children)


def render(doc: Node) -> str:
    """Render a document tree to sanitized HTML.

    Never raises for trees produced by convert().

    Example:
        >>> render(convert("- [x] done"))
        '<ul class="task-list">\\n<li class="task-item checked">...'

    """
    return HtmlRenderer().render(doc)


def render_html(markdown: str) -> str:
    """Convert markdown straight to sanitized HTML.

    Example:
        >>> render_html("Hi <b>")
        '<p>Hi &lt;b&gt;</p>\\n'

    """
    return HtmlRenderer().render(convert(markdown))
