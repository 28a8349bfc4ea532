from __future__ import annotations
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup
from markup import is_safe_url
from text_utils import excerpt, format_long_date, kebab_case

TEMPLATES = Path(__file__).resolve().parent / "templates"


def safe_href(url) -> str:
    """Front matter link, or '' when it uses a script/data scheme."""
    url = str(url or "").strip()
    return url if url and is_safe_url("a", url) else ""

def make_env(templates_dir=None, site: dict | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir or TEMPLATES)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["long_date"] = format_long_date
    env.filters["kebab"] = kebab_case
    env.filters["safe_href"] = safe_href
    env.globals["site"] = site or {}
    return env

def _tag_links(tags: list[str], prefix: str) -> list[dict]:
    links = []
    for tag in tags or []:
        key = kebab_case(tag)
        if key:
            links.append({"name": tag, "url": f"{prefix}/tags/{key}/"})
    return links

def _listing(post: dict, prefix: str, excerpt_chars: int) -> dict:
    fm = post["frontmatter"]
    return {
        "title": fm["title"],
        "url": post["slug"],
        "date": post["date"],
        "description": fm.get("description") or excerpt(post["html"], excerpt_chars),
        "tags": _tag_links(fm.get("tags", []), prefix),
    }

def render_page(env: Environment, name: str, location: str, **context) -> str:
    return env.get_template(name).render(location=location, **context).strip() + "\n"

def render_post(env: Environment, post: dict, location: str | None = None, prefix: str = "/blog") -> str:
    """Single blog post: breadcrumb, title, long-form date, tag links, sanitized body."""
    fm = post["frontmatter"]
    return render_page(
        env, "post.html", location or post["slug"],
        title=fm["title"],
        date=post["date"],
        tags=_tag_links(fm.get("tags", []), prefix),
        back_url=prefix,
        # sanitized when the content was loaded
        body=Markup(post["html"]),
    )

def render_blog_index(env, posts, prefix="/blog", excerpt_chars=160) -> str:
    return render_page(env, "blog.html", prefix + "/", title="Blog",
                       posts=[_listing(p, prefix, excerpt_chars) for p in posts])

def render_tag(env, key, group, prefix="/blog", excerpt_chars=160) -> str:
    return render_page(env, "tag.html", f"{prefix}/tags/{key}/", title=f"#{group['name']}",
                       tag=group["name"], back_url=f"{prefix}/tags/",
                       posts=[_listing(p, prefix, excerpt_chars) for p in group["posts"]])

def render_tags_index(env, groups: dict, prefix="/blog") -> str:
    tags = [{"name": g["name"], "url": f"{prefix}/tags/{k}/", "count": len(g["posts"])}
            for k, g in groups.items()]
    return render_page(env, "tags.html", f"{prefix}/tags/", title="Tags", tags=tags, back_url=prefix)

def _entry(e: dict) -> dict:
    return {**e["frontmatter"], "html": Markup(e["html"])}

def render_home(env, jobs, projects, posts, prefix="/blog", recent=3, excerpt_chars=160) -> str:
    return render_page(
        env, "index.html", "/",
        title=None,
        jobs=[_entry(j) for j in jobs],
        featured=[_entry(p) for p in projects.get("featured", [])],
        projects=[_entry(p) for p in projects.get("others", [])],
        posts=[_listing(p, prefix, excerpt_chars) for p in posts[:recent]],
        blog_url=prefix,
    )

def render_not_found(env) -> str:
    return render_page(env, "404.html", "/404", title="404: Not Found")
