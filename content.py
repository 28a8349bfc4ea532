"""Content loading: markdown collections (posts, jobs, projects) with YAML front matter.

Every entry is a plain dict::

    {"frontmatter": {...}, "body": "<markdown>", "html": "<sanitized html>", "path": Path}

Posts additionally carry ``slug`` (the site path, always ``/.../``).
"""
from __future__ import annotations
import yaml
from pathlib import Path
from markup import markdown_to_html
from text_utils import ContentError, kebab_case, parse_date

FRONT_MATTER_DELIM = "---"


def parse_markdown_text(text: str, source: str = "<string>") -> tuple[dict, str]:
    lines = text.lstrip("﻿").splitlines(keepends=True)
    if not lines or lines[0].strip() != FRONT_MATTER_DELIM:
        return {}, text

    for i in range(1, len(lines)):
        if lines[i].strip() == FRONT_MATTER_DELIM:
            raw, body = "".join(lines[1:i]), "".join(lines[i+1:])
            break
    else:
        raise ContentError(f"{source}: front matter block is never closed")

    try:
        fm = yaml.safe_load(raw) or {}
    except yaml.YAMLError as e:
        raise ContentError(f"{source}: invalid YAML front matter: {e}") from e
    if not isinstance(fm, dict):
        raise ContentError(f"{source}: front matter must be a mapping, got {type(fm).__name__}")
    return fm, body.lstrip("\n")

def parse_markdown_file(path) -> tuple[dict, str]:
    path = Path(path)
    return parse_markdown_text(path.read_text(encoding="utf-8"), str(path))

def load_collection(content_dir, name: str) -> list[dict]:
    root = Path(content_dir) / name
    if not root.is_dir():
        print(f"   no {name}/ directory under {content_dir} (skipping)", flush=True)
        return []

    entries = []
    for md in sorted(root.rglob("*.md")):
        fm, body = parse_markdown_file(md)
        entries.append({"frontmatter": fm, "body": body, "html": markdown_to_html(body), "path": md})
    print(f"   {name}: {len(entries)} file(s)", flush=True)
    return entries

def normalize_slug(slug: str) -> str:
    slug = "/" + str(slug).strip().strip("/")
    return slug if slug == "/" else slug + "/"

def normalize_tags(raw, source) -> list[str]:
    """`tags: git` and `tags: [git, python]` both allowed; anything else is an error."""
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw] if raw.strip() else []
    if isinstance(raw, list):
        return [str(t) for t in raw if t is not None and str(t).strip()]
    raise ContentError(f"{source}: tags must be a string or a list, got {type(raw).__name__}")

def _by_date_desc(entries: list[dict]) -> list[dict]:
    for e in entries:
        if "date" not in e["frontmatter"]:
            raise ContentError(f"{e['path']}: missing 'date' in front matter")
        try:
            e["date"] = parse_date(e["frontmatter"]["date"])
        except ContentError as ex:
            raise ContentError(f"{e['path']}: {ex}") from ex
    return sorted(entries, key=lambda e: e["date"], reverse=True)

def load_posts(content_dir, blog_prefix: str = "/blog") -> list[dict]:
    posts, seen = [], {}
    for e in load_collection(content_dir, "posts"):
        fm = e["frontmatter"]
        if fm.get("draft"):
            print(f"      draft skipped: {e['path']}", flush=True)
            continue
        if not fm.get("title"):
            raise ContentError(f"{e['path']}: post has no title")
        fm["tags"] = normalize_tags(fm.get("tags"), e["path"])
        if fm.get("slug"):
            e["slug"] = normalize_slug(fm["slug"])
        else:
            name = kebab_case(fm["title"])
            if not name:
                raise ContentError(f"{e['path']}: title {fm['title']!r} gives no usable slug; set 'slug' in front matter")
            e["slug"] = normalize_slug(f"{blog_prefix}/{name}")
        if e["slug"] in seen:
            raise ContentError(f"{e['path']}: slug {e['slug']} already used by {seen[e['slug']]}")
        seen[e["slug"]] = e["path"]
        posts.append(e)
    return _by_date_desc(posts)

def load_jobs(content_dir) -> list[dict]:
    return _by_date_desc(load_collection(content_dir, "jobs"))

def load_projects(content_dir) -> dict:
    projects = _by_date_desc(load_collection(content_dir, "projects"))
    featured = [p for p in projects if p["frontmatter"].get("featured")]
    others = [p for p in projects
              if not p["frontmatter"].get("featured")
              and p["frontmatter"].get("showInProjects", True) is not False]
    return {"featured": featured, "others": others}

def find_post(posts: list[dict], path: str) -> dict:
    """Return the post whose slug matches ``path`` (trailing slash optional)."""
    want = normalize_slug(path)
    for p in posts:
        if p["slug"] == want:
            return p
    raise ContentError(f"no post with slug {want}")

def posts_by_tag(posts: list[dict]) -> dict[str, dict]:
    """Group posts by tag route key: {kebab: {"name": first spelling seen, "posts": [...]}}."""
    out: dict[str, dict] = {}
    for p in posts:
        for tag in p["frontmatter"].get("tags", []):
            key = kebab_case(tag)
            if not key:
                continue
            group = out.setdefault(key, {"name": tag, "posts": []})
            if p not in group["posts"]:
                group["posts"].append(p)
    return out
