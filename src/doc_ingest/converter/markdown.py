"""HTML to Markdown conversion."""

import re

from bs4 import BeautifulSoup, Tag
from markdownify import ATX
from markdownify import MarkdownConverter as BaseMarkdownConverter

# Upper bound on the ancestor walk in detect_language; real documentation
# DOMs are far shallower.
_MAX_ANCESTOR_DEPTH = 64

_LANGUAGE_PREFIXES = ("language-", "lang-", "highlight-")

_SHORT_LANGUAGE_CLASSES = frozenset({
    "python", "py", "javascript", "js", "typescript", "ts",
    "ruby", "go", "rust", "java", "cpp", "c", "bash", "shell",
    "json", "yaml", "xml", "html", "css", "sql", "graphql",
})


def _classes(el: Tag) -> list[str]:
    raw: str | list[str] = el.get("class") or []
    return raw.split() if isinstance(raw, str) else list(raw)


def language_from_classes(el: Tag, short_names: bool = True) -> str | None:
    """Language named by a ``language-*``/``lang-*``/``highlight-*`` class.

    Bare names such as ``python`` count only when ``short_names`` is set.
    Returns None when the element carries no language class at all.
    """
    for cls in _classes(el):
        for prefix in _LANGUAGE_PREFIXES:
            if cls.startswith(prefix):
                return cls[len(prefix):]
        if short_names and cls in _SHORT_LANGUAGE_CLASSES:
            return cls
    return None


def detect_language(el: Tag) -> str:
    """Language of a code block, or an empty string.

    Looks at the element, then an inner ``<code>``, then each ancestor up to
    the document root. Ancestors only count with a prefixed class.
    """
    lang = language_from_classes(el)
    if lang is not None:
        return lang

    inner = el.find("code")
    if isinstance(inner, Tag):
        lang = language_from_classes(inner)
        if lang is not None:
            return lang

    node = el.parent
    depth = 0
    while isinstance(node, Tag) and depth < _MAX_ANCESTOR_DEPTH:
        lang = language_from_classes(node, short_names=False)
        if lang is not None:
            return lang
        node = node.parent
        depth += 1

    return ""


def has_language_class(el: Tag) -> bool:
    """Whether the element, or one of its ancestors by prefix, names a language."""
    if language_from_classes(el) is not None:
        return True
    node = el.parent
    depth = 0
    while isinstance(node, Tag) and depth < _MAX_ANCESTOR_DEPTH:
        if language_from_classes(node, short_names=False) is not None:
            return True
        node = node.parent
        depth += 1
    return False


def code_text(el: Tag) -> str:
    """Raw text of a code container without surrounding blank lines."""
    target = el
    if el.name != "pre":
        pre = el.find("pre")
        if isinstance(pre, Tag):
            target = pre
    code = target.find("code") if target.name == "pre" else None
    text = (code if isinstance(code, Tag) else target).get_text()
    return text.strip("\n")


def fence(code: str, lang: str = "") -> str:
    return f"```{lang}\n{code}\n```"


class MarkdownConverter(BaseMarkdownConverter):
    """Markdown converter tuned for reference documentation."""

    def __init__(self, **kwargs):
        super().__init__(
            heading_style=ATX,
            bullets="-",
            strong_em_symbol="*",
            **kwargs,
        )

    def convert_pre(self, el: Tag, text: str, parent_tags=None, **kwargs) -> str:
        """Fenced code block tagged with the detected language."""
        return f"\n\n{fence(code_text(el), detect_language(el))}\n\n"

    def convert_code(self, el: Tag, text: str, parent_tags=None, **kwargs) -> str:
        """Handle inline code."""
        if el.parent and el.parent.name == "pre":
            return text
        code = el.get_text()
        if "`" in code:
            return f"`` {code} ``"
        return f"`{code}`"

    def convert_table(self, el: Tag, text: str, parent_tags=None, **kwargs) -> str:
        """Convert HTML tables to pipe tables."""
        rows = []
        header_row = el.find("tr") if el.find("th") else None
        thead = el.find("thead")
        if thead:
            header_row = thead.find("tr")

        if header_row:
            headers = [self._cell_text(c) for c in header_row.find_all(["th", "td"])]
            rows.append("| " + " | ".join(headers) + " |")
            rows.append("| " + " | ".join(["---"] * len(headers)) + " |")

        for tr in el.find_all("tr"):
            if tr is header_row:
                continue
            cells = [self._cell_text(c) for c in tr.find_all(["th", "td"])]
            if cells:
                rows.append("| " + " | ".join(cells) + " |")

        if rows:
            return "\n\n" + "\n".join(rows) + "\n\n"
        return ""

    @staticmethod
    def _cell_text(cell: Tag) -> str:
        text = cell.get_text(separator=" ", strip=True)
        return text.replace("\n", " ").replace("|", "\\|")

    def convert_svg(self, el: Tag, text: str, parent_tags=None, **kwargs) -> str:
        """Inline SVG icons carry no useful text."""
        return ""


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to Markdown."""
    if not html or not html.strip():
        return ""

    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    markdown = MarkdownConverter().convert_soup(soup)

    markdown = re.sub(r"\n{3,}", "\n\n", markdown)
    return markdown.strip()
