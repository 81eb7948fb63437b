import pytest
from bs4 import BeautifulSoup

from doc_ingest.config import ContentSelectors
from doc_ingest.converter import detect_language, html_to_markdown
from doc_ingest.extractor import ContentExtractor, classify_entry_type
from doc_ingest.extractor.content import REPO_ENTRY_TYPES
from doc_ingest.links import LinkNormalizer


@pytest.fixture
def extractor(base_url):
    return ContentExtractor(ContentSelectors(), LinkNormalizer(base_url))


def test_pre_with_language_class_becomes_fenced_block(extractor):
    html = '<html><body><pre class="language-python">print(1)</pre></body></html>'

    page = extractor.extract(html, "x.html")

    assert page.content == "```python\nprint(1)\n```"


def test_code_block_language_from_inner_code(extractor):
    html = '<html><body><pre><code class="lang-rust">let x = 1;</code></pre></body></html>'
    assert extractor.extract(html, "x.html").content == "```rust\nlet x = 1;\n```"


def test_code_block_without_language(extractor):
    html = "<html><body><pre>plain</pre></body></html>"
    assert extractor.extract(html, "x.html").content == "```\nplain\n```"


def test_highlight_div_is_a_code_container(extractor):
    html = '<html><body><div class="highlight-python"><pre>x = 1</pre></div></body></html>'
    assert extractor.extract(html, "x.html").content == "```python\nx = 1\n```"


def test_language_from_ancestor():
    soup = BeautifulSoup(
        '<div class="language-js"><div><pre>f()</pre></div></div>', "lxml"
    )
    assert detect_language(soup.find("pre")) == "js"


def test_definition_list(extractor):
    html = (
        "<html><body><dl>"
        "<dt>timeout</dt><dd>Seconds to wait.</dd>"
        "<dt>retries</dt><dd>How often to <em>retry</em>.</dd>"
        "</dl></body></html>"
    )

    content = extractor.extract(html, "x.html").content

    assert content == (
        "**timeout**\n: Seconds to wait.\n**retries**\n: How often to *retry*."
    )


def test_blocks_joined_with_blank_line(extractor):
    html = "<html><body><h2>Usage</h2><p>Call <code>run()</code> first.</p></body></html>"

    content = extractor.extract(html, "x.html").content

    assert content == "## Usage\n\nCall `run()` first."


def test_title_from_h1(extractor):
    html = "<html><head><title>Tab</title></head><body><main><h1> Vec </h1></main></body></html>"
    assert extractor.extract(html, "x.html").title == "Vec"


def test_title_falls_back_to_title_tag(extractor):
    html = "<html><head><title>Tab</title></head><body><p>x</p></body></html>"
    assert extractor.extract(html, "x.html").title == "Tab"


def test_title_untitled(extractor):
    assert extractor.extract("<html><body><p>x</p></body></html>", "x.html").title == "Untitled"


def test_remove_selectors_drop_content_but_keep_links(extractor):
    html = (
        "<html><body>"
        '<nav><a href="guide/intro.html">Intro</a></nav>'
        "<main><h1>Home</h1><p>Welcome</p></main>"
        "<footer>Copyright</footer>"
        "</body></html>"
    )

    page = extractor.extract(html, "index.html")

    assert "Intro" not in page.content
    assert "Copyright" not in page.content
    assert "Welcome" in page.content
    assert page.links == ["guide/intro.html"]


def test_no_content_match_gives_empty_content(base_url):
    extractor = ContentExtractor(ContentSelectors(content="#missing"), LinkNormalizer(base_url))
    page = extractor.extract("<html><body><p>x</p></body></html>", "x.html")
    assert page.content == ""


def test_links_are_filtered_and_normalized(extractor):
    html = (
        "<html><body>"
        '<a href="#section">anchor</a>'
        '<a href="javascript:void(0)">js</a>'
        '<a href="mailto:docs@example.com">mail</a>'
        '<a href="https://elsewhere.org/">out</a>'
        '<a href="../api/ref.html">api</a>'
        '<a href="advanced.html#top">adv</a>'
        "<a>no href</a>"
        "</body></html>"
    )

    links = extractor.extract(html, "guide/intro.html").links

    assert links == ["api/ref.html", "guide/advanced.html"]


def test_invalid_selector_does_not_raise(base_url):
    selectors = ContentSelectors(title="h1[", links="a[[")
    extractor = ContentExtractor(selectors, LinkNormalizer(base_url))

    page = extractor.extract("<html><body><h1>T</h1></body></html>", "x.html")

    assert page.title == "Untitled"
    assert page.links == []


def test_entry_type_attribute(base_url):
    selectors = ContentSelectors(entry_type_attr="data-type")
    extractor = ContentExtractor(selectors, LinkNormalizer(base_url))
    html = '<html><body><div data-type="method"><p>x</p></div></body></html>'

    assert extractor.extract(html, "api/fn.html").entry_type == "method"


def test_entry_type_attribute_missing_falls_back_to_path(base_url):
    selectors = ContentSelectors(entry_type_attr="data-type")
    extractor = ContentExtractor(selectors, LinkNormalizer(base_url))

    assert extractor.extract("<html><body><p>x</p></body></html>", "std/enum.Option.html").entry_type == "enum"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("std/struct.Vec.html", "class"),
        ("std/fn.spawn.html", "function"),
        ("std/io/module.html", "module"),
        ("std/trait.Read.html", "trait"),
        ("std/enum.Option.html", "enum"),
        ("std/constant.MAX.html", "constant"),
        ("std/type.Result.html", "type"),
        ("guide/intro.html", "page"),
        ("overview.html", "section"),
    ],
)
def test_classify_entry_type(path, expected):
    assert classify_entry_type(path) == expected


def test_classify_repo_entry_type():
    assert classify_entry_type("api-reference/routing.md", REPO_ENTRY_TYPES) == "api"
    assert classify_entry_type("guides/routing.md", REPO_ENTRY_TYPES) == "guide"
    assert classify_entry_type("examples/hello.md", REPO_ENTRY_TYPES) == "example"
    assert classify_entry_type("routing/basics.md", REPO_ENTRY_TYPES) == "page"


def test_html_to_markdown_table():
    html = "<table><tr><th>Name</th><th>Type</th></tr><tr><td>a|b</td><td>int</td></tr></table>"

    markdown = html_to_markdown(html)

    assert "| Name | Type |" in markdown
    assert "| --- | --- |" in markdown
    assert "| a\\|b | int |" in markdown


def test_page_level_short_class_is_not_a_language(base_url):
    extractor = ContentExtractor(ContentSelectors(content="main"), LinkNormalizer(base_url))
    html = '<html><body class="html not-front"><main><div><p>Hello prose</p></div></main></body></html>'

    content = extractor.extract(html, "x.html").content

    assert "```" not in content
    assert "Hello prose" in content


def test_pre_ignores_short_class_on_ancestor(extractor):
    html = '<html><body class="html"><pre>make all</pre></body></html>'
    assert extractor.extract(html, "x.html").content == "```\nmake all\n```"


def test_short_class_on_code_block_itself(extractor):
    html = '<html><body><pre class="python">x = 1</pre></body></html>'
    assert extractor.extract(html, "x.html").content == "```python\nx = 1\n```"


def test_malformed_link_does_not_drop_page(extractor):
    html = (
        "<html><body>"
        '<a href="http://[broken/x.html">bad</a><a href="a.html">a</a>'
        "<main><p>Still here</p></main>"
        "</body></html>"
    )

    page = extractor.extract(html, "index.html")

    assert page.links == ["a.html"]
    assert "Still here" in page.content
