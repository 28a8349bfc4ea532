import shutil
from pathlib import Path
from text_utils import ContentError
from content import load_posts, load_jobs, load_projects, posts_by_tag
from render import (make_env, render_post, render_blog_index, render_tag,
                    render_tags_index, render_home, render_not_found)


def route_to_file(route: str) -> str:
    """'/blog/lit/' -> 'blog/lit/index.html'; '/' -> 'index.html'."""
    route = route.strip("/")
    return f"{route}/index.html" if route else "index.html"

def write_page(out_dir: Path, rel: str, html: str) -> str:
    dest = out_dir / rel
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(html, encoding="utf-8")
    return rel

def copy_static(static_dir: Path, out_dir: Path) -> list[str]:
    if not static_dir.is_dir():
        return []
    written = []
    for src in sorted(static_dir.rglob("*")):
        if src.is_file():
            rel = src.relative_to(static_dir).as_posix()
            (out_dir / rel).parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, out_dir / rel)
            written.append(rel)
    return written

def build_site(cfg: dict) -> list[str]:
    paths, blog = cfg["paths"], cfg["blog"]
    prefix = "/" + blog["prefix"].strip("/")
    content_dir, out_dir = Path(paths["content"]), Path(paths["output"])

    print(f">> Loading content from {content_dir}", flush=True)
    posts = load_posts(content_dir, prefix)
    jobs = load_jobs(content_dir)
    projects = load_projects(content_dir)
    tags = posts_by_tag(posts)

    env = make_env(paths["templates"], cfg["site"])
    chars = blog["excerpt_chars"]

    if out_dir.exists():
        shutil.rmtree(out_dir)
    out_dir.mkdir(parents=True)

    written = [
        write_page(out_dir, "index.html",
                   render_home(env, jobs, projects, posts, prefix, blog["recent_posts"], chars)),
        write_page(out_dir, route_to_file(prefix), render_blog_index(env, posts, prefix, chars)),
        write_page(out_dir, route_to_file(f"{prefix}/tags"), render_tags_index(env, tags, prefix)),
        write_page(out_dir, "404.html", render_not_found(env)),
    ]
    for post in posts:
        if route_to_file(post["slug"]) in written:
            raise ContentError(f"{post['path']}: slug {post['slug']} collides with a generated page")
        written.append(write_page(out_dir, route_to_file(post["slug"]), render_post(env, post, prefix=prefix)))
        print(f"   post: {post['slug']}", flush=True)
    for key, group in tags.items():
        written.append(write_page(out_dir, route_to_file(f"{prefix}/tags/{key}"),
                                  render_tag(env, key, group, prefix, chars)))

    static = copy_static(Path(paths["static"]), out_dir)
    written.extend(static)
    print(f">> Built {len(written)} file(s) ({len(posts)} post(s), {len(tags)} tag(s), "
          f"{len(static)} static) into {out_dir}", flush=True)
    return written
