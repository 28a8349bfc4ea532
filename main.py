import sys, argparse, datetime, requests, yaml
from pathlib import Path
from config import load_config
from text_utils import ContentError
from site_builder import build_site
from deploy_state import init_db, changed_files, mark_deployed, removed_files, forget_deployed
from publisher.front_matter import new_post
from publisher.github_files import github_commit_files, PublishError


def cmd_build(cfg, args):
    build_site(cfg)

def cmd_new(cfg, args):
    tags = [t.strip() for t in (args.tags or "").split(",") if t.strip()]
    dest = new_post(cfg["paths"]["content"], args.title, tags, args.description or "",
                    cfg["blog"]["prefix"])
    print(f">> Draft created: {dest}", flush=True)

def collect_output(out_dir: Path) -> dict[str, bytes]:
    return {p.relative_to(out_dir).as_posix(): p.read_bytes()
            for p in sorted(out_dir.rglob("*")) if p.is_file()}

def cmd_deploy(cfg, args):
    dep = cfg["deploy"]
    if not dep["repo"]:
        raise ValueError("no deploy repo: set deploy.repo in config.yaml or GITHUB_PAGES_REPO")

    build_site(cfg)
    files = collect_output(Path(cfg["paths"]["output"]))
    con = init_db(cfg["paths"]["deploy_db"])
    todo = files if args.all else changed_files(con, files)
    gone = removed_files(con, files)
    print(f">> Deploy: {len(todo)} changed, {len(gone)} removed / {len(files)} file(s) "
          f"-> {dep['repo']}@{dep['branch']}", flush=True)
    if not todo and not gone:
        print(">> Nothing to deploy.", flush=True)
        return
    if args.dry_run:
        for p in sorted(todo):
            print(f"   would upload {p}", flush=True)
        for p in gone:
            print(f"   would delete {p}", flush=True)
        return

    msg = f"{dep['message']} ({datetime.datetime.now().strftime('%Y-%m-%d %H:%M')})"
    commit = github_commit_files(dep["repo"], dep["branch"], dep["token"], todo, msg, deletions=gone)
    mark_deployed(con, todo)
    forget_deployed(con, gone)
    print(">> Published commit:", commit.get("sha"), flush=True)

def make_parser():
    ap = argparse.ArgumentParser(prog="folio", description="Build and publish the portfolio site.")
    ap.add_argument("--config", help="path to config.yaml (default: next to main.py)")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("build", help="render content into the output directory").set_defaults(func=cmd_build)

    p = sub.add_parser("new", help="scaffold a draft blog post")
    p.add_argument("title")
    p.add_argument("--tags", help="comma-separated tags")
    p.add_argument("--description")
    p.set_defaults(func=cmd_new)

    p = sub.add_parser("deploy", help="build and commit changed files to the Pages repo")
    p.add_argument("--all", action="store_true", help="upload every file, not just changed ones")
    p.add_argument("--dry-run", action="store_true")
    p.set_defaults(func=cmd_deploy)
    return ap

def main(argv=None) -> int:
    args = make_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
        args.func(cfg, args)
    except (ContentError, PublishError, ValueError, OSError,
            yaml.YAMLError, requests.RequestException) as e:
        print(f"!! {e}", file=sys.stderr, flush=True)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
