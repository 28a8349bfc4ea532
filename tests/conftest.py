"""
Shared fixtures: a small content tree on disk and a config pointing at it.
"""
import textwrap
from pathlib import Path

import pytest

from config import DEFAULTS, _merge

REPO = Path(__file__).resolve().parent.parent


def write_md(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    write_md(root, "posts/lit/index.md", """
        ---
        title: Building Lit
        description: A Git clone.
        date: 2024-03-12
        slug: /blog/lit
        tags: [Git, Node.js]
        ---

        Objects are stored by **hash**.

        <script>alert(1)</script>
    """)
    write_md(root, "posts/older/index.md", """
        ---
        title: An Older Post
        date: 2023-01-05
        tags: [git]
        ---

        First post.
    """)
    write_md(root, "posts/wip/index.md", """
        ---
        title: Work In Progress
        date: 2024-06-01
        draft: true
        ---

        Not yet.
    """)
    write_md(root, "jobs/acme/index.md", """
        ---
        title: Engineer
        company: Acme
        date: 2022-06-01
        range: June 2022 - Present
        ---

        - Shipped things
    """)
    write_md(root, "projects/lit/index.md", """
        ---
        title: Lit
        date: 2024-03-01
        featured: true
        tech: [Python]
        ---

        A Git clone.
    """)
    write_md(root, "projects/old/index.md", """
        ---
        title: Hidden
        date: 2020-01-01
        showInProjects: false
        ---

        Hidden.
    """)
    write_md(root, "projects/dots/index.md", """
        ---
        title: dotfiles
        date: 2021-01-01
        ---

        Config.
    """)
    return root


@pytest.fixture
def cfg(tmp_path, content_dir):
    static = tmp_path / "static"
    static.mkdir()
    (static / "site.webmanifest").write_text("{}", encoding="utf-8")
    c = _merge(DEFAULTS, {"site": {"title": "Jane Doe", "author": "Jane Doe"}})
    c["paths"] = {
        "content": content_dir,
        "templates": REPO / "templates",
        "static": static,
        "output": tmp_path / "public",
        "deploy_db": tmp_path / "data" / "deploy.db",
    }
    c["deploy"]["token"] = ""
    return c
