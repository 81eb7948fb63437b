"""Built-in documentation repositories."""

from doc_ingest.config import GitRepoConfig

_DEFAULT_IGNORE_FILES = ["README.md", "CHANGELOG.md"]
_NODE_IGNORE_DIRS = [".git", "node_modules"]

REPO_SOURCES: list[GitRepoConfig] = [
    GitRepoConfig(
        name="python",
        display_name="Python",
        version="main",
        base_url="https://github.com/python/cpython/tree/main/Doc",
        available_versions=["main", "3.13", "3.12", "3.11"],
        ignore_files=["README.md", "LICENSE", "CHANGELOG.md"],
        ignore_dirs=["_sources", ".git"],
    ),
    GitRepoConfig(
        name="nextjs",
        display_name="Next.js",
        version="v16.1.2",
        base_url="https://github.com/vercel/next.js/tree/v16.1.2/docs",
        available_versions=["v16.1.2", "canary", "v15.1.0", "v14.2.0"],
        ignore_files=_DEFAULT_IGNORE_FILES,
        ignore_dirs=_NODE_IGNORE_DIRS,
    ),
    GitRepoConfig(
        name="nuxtjs",
        display_name="Nuxt.js",
        version="v4.2.2",
        base_url="https://github.com/nuxt/nuxt/tree/v4.2.2/docs",
        available_versions=["v4.2.2", "main", "v3.13.0"],
        ignore_files=_DEFAULT_IGNORE_FILES,
        ignore_dirs=_NODE_IGNORE_DIRS,
    ),
    GitRepoConfig(
        name="bun",
        display_name="Bun",
        version="bun-v1.3.6",
        base_url="https://github.com/oven-sh/bun/tree/bun-v1.3.6/docs",
        available_versions=["bun-v1.3.6", "main", "bun-v1.2.0"],
        ignore_files=_DEFAULT_IGNORE_FILES,
        ignore_dirs=[".git"],
    ),
    GitRepoConfig(
        name="mdn",
        display_name="MDN Web Docs",
        version="main",
        base_url="https://github.com/mdn/content/tree/main/files/en-us/web",
        available_versions=["main"],
        ignore_files=["README.md"],
        ignore_dirs=[".git"],
    ),
    GitRepoConfig(
        name="typescript",
        display_name="TypeScript",
        version="v2",
        base_url="https://github.com/microsoft/TypeScript-Website/tree/v2/packages/documentation/copy/en",
        available_versions=["v2", "main"],
        ignore_files=_DEFAULT_IGNORE_FILES,
        ignore_dirs=_NODE_IGNORE_DIRS,
    ),
    GitRepoConfig(
        name="hono",
        display_name="Hono",
        version="main",
        base_url="https://github.com/honojs/website/tree/main/docs",
        available_versions=["main"],
        ignore_files=_DEFAULT_IGNORE_FILES,
        ignore_dirs=_NODE_IGNORE_DIRS,
    ),
    GitRepoConfig(
        name="elysiajs",
        display_name="ElysiaJS",
        version="main",
        base_url="https://github.com/elysiajs/documentation/tree/main/docs",
        available_versions=["main"],
        ignore_files=_DEFAULT_IGNORE_FILES,
        ignore_dirs=_NODE_IGNORE_DIRS,
    ),
]
