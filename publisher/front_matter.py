from __future__ import annotations
import datetime, yaml
from pathlib import Path
from text_utils import kebab_case


def build_front_matter_dict(
    *,
    title: str,
    description: str = "",
    tags: list[str] | None = None,
    date: datetime.date | None = None,
    slug: str | None = None,
    blog_prefix: str = "/blog",
    draft: bool = True,
):
    tags = [str(t) for t in (tags or [])]
    dt = date or datetime.date.today()
    name = kebab_case(title)
    if not name:
        raise ValueError(f"title {title!r} has no usable characters for a slug")

    fm = {
        "title": str(title),
        "description": description,
        "date": dt.isoformat(),
        "slug": slug or f"{blog_prefix.rstrip('/')}/{name}/",
        "tags": tags,
        "draft": draft,
    }
    return fm, name

def front_matter_text(fm_dict: dict) -> str:
    yaml_txt = yaml.safe_dump(
        fm_dict, allow_unicode=True, sort_keys=False, default_flow_style=False, width=1000
    )
    return f"---\n{yaml_txt}---\n\n"

def new_post(content_dir, title: str, tags=None, description: str = "", blog_prefix: str = "/blog") -> Path:
    """Scaffold posts/<kebab-title>/index.md as a draft. Never overwrites."""
    fm, name = build_front_matter_dict(title=title, description=description, tags=tags,
                                       blog_prefix=blog_prefix)
    dest = Path(content_dir) / "posts" / name / "index.md"
    if dest.exists():
        raise FileExistsError(f"{dest} already exists")
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(front_matter_text(fm) + f"Write about {title} here.\n", encoding="utf-8")
    return dest
