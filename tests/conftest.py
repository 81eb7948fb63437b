"""Pytest configuration and fixtures."""

import httpx
import pytest

from doc_ingest.config import SourceDefinition, TraversalOptions

BASE_URL = "https://docs.example.com/"


def page(title: str, body: str = "", links: tuple[str, ...] = ()) -> str:
    """Minimal documentation page with an h1, a paragraph and some anchors."""
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return (
        "<html><head><title>ignored</title></head><body>"
        f"<nav>{anchors}</nav>"
        f"<main><h1>{title}</h1><p>{body or title + ' body'}</p></main>"
        "</body></html>"
    )


class FakeSite:
    """Serves fixed pages through an httpx.MockTransport and records requests."""

    def __init__(self, pages: dict[str, str], status: dict[str, int] | None = None):
        self.pages = pages
        self.status = status or {}
        self.requested: list[str] = []
        self.on_request = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.lstrip("/")
        self.requested.append(path)
        if self.on_request is not None:
            self.on_request(path)
        if path in self.status:
            return httpx.Response(self.status[path], html="<html><body>error</body></html>")
        if path not in self.pages:
            return httpx.Response(404, html="<html><body>not found</body></html>")
        return httpx.Response(200, html=self.pages[path])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def base_url():
    """Base location of the fake documentation site."""
    return BASE_URL


@pytest.fixture
def docs_site():
    """A small site with two sections, a nested page and an about page."""
    return FakeSite(
        {
            "index.html": page(
                "Home",
                links=(
                    "guide/intro.html",
                    "guide/advanced.html",
                    "api/ref.html",
                    "about.html",
                ),
            ),
            "guide/intro.html": page(
                "Introduction",
                links=("deep/one.html", "/api/ref.html", "#top", "mailto:docs@example.com"),
            ),
            "guide/advanced.html": page("Advanced", links=("intro.html",)),
            "api/ref.html": page("Reference", links=("https://elsewhere.org/x.html",)),
            "about.html": page("About"),
            "guide/deep/one.html": page("Deep One"),
        }
    )


def make_definition(**option_overrides) -> SourceDefinition:
    options = {"seed_paths": ["index.html"], "delay_ms": 0, **option_overrides}
    return SourceDefinition(
        name="example",
        display_name="Example",
        version="1.0",
        base_url=BASE_URL,
        options=TraversalOptions(**options),
    )
