"""Built-in documentation web sites."""

import re

from doc_ingest.config import ContentSelectors, SourceDefinition, TraversalOptions

RUST_STD = SourceDefinition(
    name="rust",
    display_name="Rust",
    version="1.84.0",
    base_url="https://doc.rust-lang.org/std/",
    description="Rust standard library documentation",
    options=TraversalOptions(
        seed_paths=["index.html"],
        skip_patterns=[re.compile(r"src/"), re.compile(r"\.rs\.html$")],
        max_depth=2,
        max_pages=50,
        concurrency=4,
        delay_ms=100,
    ),
    selectors=ContentSelectors(
        title="h1.fqn, h1",
        content="#main-content, .docblock, .content",
        links=".item-table a, .sidebar-elems a, .content a",
        remove_selectors=[".sidebar", ".source", "nav"],
    ),
    attribution="© The Rust Project Developers. Licensed under Apache 2.0 or MIT.",
)

REACT = SourceDefinition(
    name="react",
    display_name="React",
    version="19",
    base_url="https://react.dev/",
    description="Official React documentation",
    options=TraversalOptions(
        seed_paths=["learn", "reference/react", "reference/react-dom"],
        skip_patterns=[re.compile(r"^blog"), re.compile(r"^community"), re.compile(r"^versions")],
        only_patterns=[re.compile(r"^learn"), re.compile(r"^reference")],
        max_depth=3,
        max_pages=200,
        concurrency=2,
        delay_ms=300,
    ),
    selectors=ContentSelectors(
        title="h1, article h1",
        content="article, main, .markdown",
        links="nav a, article a",
        remove_selectors=["nav", "footer", ".sandpack"],
    ),
    attribution="© Meta Platforms, Inc. Licensed under CC BY 4.0.",
)

NODEJS = SourceDefinition(
    name="nodejs",
    display_name="Node.js",
    version="22",
    base_url="https://nodejs.org/docs/latest-v22.x/api/",
    description="Node.js API documentation",
    options=TraversalOptions(
        seed_paths=["index.html"],
        skip_patterns=[re.compile(r"^api/all\.html"), re.compile(r"^download")],
        max_depth=2,
        max_pages=150,
        concurrency=4,
        delay_ms=150,
    ),
    selectors=ContentSelectors(
        title="h1, #apicontent h1",
        content="#apicontent, article",
        links="#apicontent a, .toc a",
        remove_selectors=["#column2", "nav"],
    ),
    attribution="© OpenJS Foundation. Licensed under MIT.",
)

PYTHON_DOCS = SourceDefinition(
    name="python-docs",
    display_name="Python",
    version="3.13",
    base_url="https://docs.python.org/3.13/",
    description="Python standard library and language reference",
    options=TraversalOptions(
        seed_paths=["library/index.html", "reference/index.html"],
        skip_patterns=[
            re.compile(r"whatsnew"),
            re.compile(r"_sources"),
            re.compile(r"genindex"),
            re.compile(r"search\.html"),
        ],
        skip_paths=frozenset({
            "library/2to3.html",
            "library/formatter.html",
            "library/intro.html",
            "library/undoc.html",
            "bugs.html",
            "about.html",
            "copyright.html",
            "license.html",
        }),
        only_patterns=[re.compile(r"^library/"), re.compile(r"^reference/")],
        max_depth=2,
        max_pages=50,
        concurrency=4,
        delay_ms=150,
    ),
    selectors=ContentSelectors(
        title="h1",
        content=".body, article, main",
        links="a.reference.internal, .toctree-l1 a, .toctree-l2 a",
        remove_selectors=[".headerlink", ".sphinxsidebar", ".related"],
    ),
    attribution="© 2001-2024 Python Software Foundation. Licensed under the PSF License.",
)

MDN_JAVASCRIPT = SourceDefinition(
    name="mdn-javascript",
    display_name="MDN JavaScript",
    version="latest",
    base_url="https://developer.mozilla.org/en-US/docs/Web/JavaScript/",
    description="MDN Web Docs JavaScript reference and guide",
    options=TraversalOptions(
        seed_paths=["Reference", "Guide"],
        skip_patterns=[re.compile(r"/.*/.*/.*/.*/")],
        only_patterns=[re.compile(r"^Reference"), re.compile(r"^Guide")],
        max_depth=3,
        max_pages=400,
        concurrency=2,
        delay_ms=300,
    ),
    selectors=ContentSelectors(
        title="h1, .main-page-content h1",
        content=".main-page-content, article",
        links=".sidebar a, article a",
        remove_selectors=[".sidebar", ".on-github", ".bc-table"],
    ),
    attribution="© Mozilla Contributors. Licensed under CC-BY-SA 2.5.",
)

TYPESCRIPT_HANDBOOK = SourceDefinition(
    name="typescript-handbook",
    display_name="TypeScript",
    version="5.7",
    base_url="https://www.typescriptlang.org/docs/",
    description="The TypeScript handbook",
    options=TraversalOptions(
        seed_paths=["handbook/intro.html"],
        skip_patterns=[re.compile(r"^play"), re.compile(r"^community")],
        only_patterns=[re.compile(r"^handbook")],
        max_depth=3,
        max_pages=100,
        concurrency=2,
        delay_ms=200,
    ),
    selectors=ContentSelectors(
        title="h1, .article-heading",
        content="article, .markdown, #handbook-content",
        links="nav a, .toc a",
        remove_selectors=["nav", ".playground"],
    ),
    attribution="© Microsoft. Licensed under Apache 2.0.",
)

WEB_SOURCES: list[SourceDefinition] = [
    RUST_STD,
    REACT,
    NODEJS,
    PYTHON_DOCS,
    MDN_JAVASCRIPT,
    TYPESCRIPT_HANDBOOK,
]
