"""Selector-driven extraction of title, body, links and entry type."""

import logging

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from pydantic import BaseModel, Field
from soupsieve import SelectorSyntaxError

from doc_ingest.config import ContentSelectors
from doc_ingest.converter.markdown import (
    code_text,
    detect_language,
    fence,
    has_language_class,
    html_to_markdown,
)
from doc_ingest.links import LinkNormalizer

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"

# First match wins; checked against the lower-cased path.
WEB_ENTRY_TYPES: list[tuple[tuple[str, ...], str]] = [
    (("class", "struct"), "class"),
    (("function", "fn"), "function"),
    (("module", "mod"), "module"),
    (("trait", "interface"), "trait"),
    (("enum",), "enum"),
    (("constant", "const"), "constant"),
    (("type",), "type"),
]

REPO_ENTRY_TYPES: list[tuple[tuple[str, ...], str]] = [
    (("api", "reference"), "api"),
    (("guide", "tutorial"), "guide"),
    (("example",), "example"),
]

_IGNORED_HREF_PREFIXES = ("#", "javascript:", "mailto:")


def classify_entry_type(
    path: str,
    table: list[tuple[tuple[str, ...], str]] = WEB_ENTRY_TYPES,
) -> str:
    """Entry type guessed from keywords in the path."""
    lowered = path.lower()
    for keywords, entry_type in table:
        if any(keyword in lowered for keyword in keywords):
            return entry_type
    return "page" if "/" in path else "section"


class ExtractedPage(BaseModel):
    """What one fetched page contributes to the crawl."""

    title: str = UNTITLED
    content: str = ""
    links: list[str] = Field(default_factory=list)
    entry_type: str = "page"


class ContentExtractor:
    """Extract content from a page using a source's selectors."""

    def __init__(self, selectors: ContentSelectors, normalizer: LinkNormalizer):
        self.selectors = selectors
        self.normalizer = normalizer

    def extract(self, document: str | BeautifulSoup, path: str) -> ExtractedPage:
        soup = document if isinstance(document, BeautifulSoup) else BeautifulSoup(document, "lxml")

        # Navigation blocks are often removed below but still hold the links.
        links = self.extract_links(soup, path)
        entry_type = self.detect_entry_type(soup, path)

        self._remove_unwanted(soup)

        return ExtractedPage(
            title=self.extract_title(soup),
            content=self.extract_content(soup),
            links=links,
            entry_type=entry_type,
        )

    def _remove_unwanted(self, soup: BeautifulSoup) -> None:
        for selector in self.selectors.remove_selectors:
            try:
                matches = soup.select(selector)
            except SelectorSyntaxError:
                logger.debug("Invalid remove selector: %s", selector)
                continue
            for elem in matches:
                elem.decompose()

    def extract_title(self, soup: BeautifulSoup) -> str:
        for selector in self.selectors.title_selectors:
            try:
                elem = soup.select_one(selector)
            except SelectorSyntaxError:
                logger.debug("Invalid title selector: %s", selector)
                continue
            if elem is not None:
                title = elem.get_text(strip=True)
                if title:
                    return title
        return UNTITLED

    def extract_content(self, soup: BeautifulSoup) -> str:
        try:
            main = soup.select_one(self.selectors.content)
        except SelectorSyntaxError:
            logger.warning("Invalid content selector: %s", self.selectors.content)
            return ""

        if main is None:
            return ""

        blocks = []
        for child in main.children:
            block = self._node_to_markdown(child)
            if block:
                blocks.append(block)
        return "\n\n".join(blocks)

    def _node_to_markdown(self, node) -> str:
        if isinstance(node, PreformattedString):
            # Comments, CDATA, doctypes
            return ""
        if isinstance(node, NavigableString):
            return node.strip()
        if not isinstance(node, Tag):
            return ""

        if self._is_code_container(node):
            return fence(code_text(node), detect_language(node))
        if node.name == "dl":
            return self._definition_list(node)
        return html_to_markdown(str(node))

    @staticmethod
    def _is_code_container(el: Tag) -> bool:
        if el.name == "pre":
            return True
        return el.name in ("code", "div") and has_language_class(el)

    @staticmethod
    def _definition_list(dl: Tag) -> str:
        lines = []
        for child in dl.find_all(["dt", "dd"], recursive=False):
            if child.name == "dt":
                term = child.get_text(" ", strip=True)
                if term:
                    lines.append(f"**{term}**")
            else:
                description = html_to_markdown(child.decode_contents())
                if description:
                    lines.append(f": {description}")
        return "\n".join(lines)

    def extract_links(self, soup: BeautifulSoup, current_path: str) -> list[str]:
        try:
            anchors = soup.select(self.selectors.links)
        except SelectorSyntaxError:
            logger.warning("Invalid link selector: %s", self.selectors.links)
            return []

        links = []
        for anchor in anchors:
            href = anchor.get("href")
            if not isinstance(href, str):
                continue
            href = href.strip()
            if not href or href.lower().startswith(_IGNORED_HREF_PREFIXES):
                continue
            path = self.normalizer.normalize(href, current_path)
            if path is not None:
                links.append(path)
        return links

    def detect_entry_type(self, soup: BeautifulSoup, path: str) -> str:
        attr = self.selectors.entry_type_attr
        if attr:
            elem = soup.find(attrs={attr: True})
            if elem is not None:
                value = elem.get(attr)
                if isinstance(value, list):
                    value = " ".join(value)
                if value:
                    return value
        return classify_entry_type(path)
