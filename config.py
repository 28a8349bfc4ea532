import os, yaml
from pathlib import Path
from dotenv import load_dotenv

BASE = Path(__file__).resolve().parent

DEFAULTS = {
    "site": {
        "title": "Portfolio",
        "author": "",
        "description": "",
        "base_url": "http://localhost:8000",
        "nav": [
            {"name": "About", "url": "/#about"},
            {"name": "Experience", "url": "/#jobs"},
            {"name": "Work", "url": "/#projects"},
            {"name": "Blog", "url": "/blog"},
        ],
        "head": [],
    },
    "paths": {
        "content": "content",
        "templates": "templates",
        "static": "static",
        "output": "public",
        "deploy_db": "data/deploy.db",
    },
    "blog": {"prefix": "/blog", "recent_posts": 3, "excerpt_chars": 160},
    "deploy": {"repo": "", "branch": "main", "message": "Publish site"},
}


def _merge(base: dict, override: dict) -> dict:
    out = {k: (v.copy() if isinstance(v, dict) else v) for k, v in base.items()}
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out

def load_config(path=None) -> dict:
    """config.yaml merged over DEFAULTS; env vars win for deploy settings and base_url."""
    load_dotenv()
    path = Path(path) if path else BASE / "config.yaml"
    raw = {}
    if path.exists():
        print(f">> Loading {path.name} …", flush=True)
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        print(f">> {path} not found, using defaults", flush=True)
    cfg = _merge(DEFAULTS, raw)

    root = path.resolve().parent
    for key, rel in cfg["paths"].items():
        p = Path(os.path.expandvars(str(rel)))
        cfg["paths"][key] = p if p.is_absolute() else root / p

    cfg["site"]["base_url"] = os.getenv("SITE_BASE_URL", cfg["site"]["base_url"])
    cfg["deploy"]["repo"] = os.getenv("GITHUB_PAGES_REPO", cfg["deploy"]["repo"])
    cfg["deploy"]["branch"] = os.getenv("GITHUB_PAGES_BRANCH", cfg["deploy"]["branch"])
    cfg["deploy"]["token"] = os.getenv("GITHUB_TOKEN", "")
    return cfg
