"""HTML to Markdown conversion."""

from markdownify import markdownify


class MarkdownConverter:
    """Convert HTML fragments to Markdown with markdownify."""

    def __init__(self, heading_style: str = "underlined"):
        self.heading_style = heading_style

    def convert(self, html: str) -> str:
        if not html:
            return ""
        return markdownify(html, heading_style=self.heading_style).strip()
