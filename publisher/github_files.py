import base64, requests

API = "https://api.github.com"
TIMEOUT = 20


class PublishError(RuntimeError):
    def __init__(self, step: str, status: int, body: str):
        super().__init__(f"GitHub {step} failed ({status}): {body[:500]}")
        self.step, self.status, self.body = step, status, body


def _call(method: str, url: str, headers: dict, step: str, **kw) -> dict:
    r = requests.request(method, url, headers=headers, timeout=TIMEOUT, **kw)
    if r.status_code >= 400:
        raise PublishError(step, r.status_code, r.text)
    return r.json()

def github_commit_files(owner_repo: str, branch: str, token: str, files: dict[str, bytes], message: str,
                        deletions=()):
    """Commit multiple files atomically using Git 'blobs/trees/commits/refs' endpoints.

    Paths in ``deletions`` are removed in the same commit (tree entries with a null sha).
    """
    if not token:
        raise ValueError("GITHUB_TOKEN is missing or empty.")
    if not files and not deletions:
        raise ValueError("nothing to commit")
    owner, repo = owner_repo.split("/", 1)
    H = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
    }
    base = f"{API}/repos/{owner}/{repo}/git"

    # 1) Get current branch HEAD commit & base tree
    ref = _call("GET", f"{base}/ref/heads/{branch}", H, "ref lookup")
    base_commit_sha = ref["object"]["sha"]
    base_commit = _call("GET", f"{base}/commits/{base_commit_sha}", H, "commit lookup")
    base_tree_sha = base_commit["tree"]["sha"]

    # 2) Create blobs for each file
    entries = []
    for path, content in sorted(files.items()):
        blob = _call("POST", f"{base}/blobs", H, f"blob {path}", json={
            "content": base64.b64encode(content).decode("ascii"),
            "encoding": "base64",
        })
        entries.append({"path": path.lstrip("/"), "mode": "100644", "type": "blob", "sha": blob["sha"]})
        print(f"      blob {blob['sha'][:7]} {path}", flush=True)
    for path in sorted(deletions):
        entries.append({"path": path.lstrip("/"), "mode": "100644", "type": "blob", "sha": None})
        print(f"      delete {path}", flush=True)

    # 3) Create a new tree from base + entries
    tree = _call("POST", f"{base}/trees", H, "tree", json={
        "base_tree": base_tree_sha,
        "tree": entries,
    })

    # 4) Create commit pointing to the new tree
    commit = _call("POST", f"{base}/commits", H, "commit", json={
        "message": message,
        "tree": tree["sha"],
        "parents": [base_commit_sha],
    })

    # 5) Move branch ref to new commit (no force)
    _call("PATCH", f"{base}/refs/heads/{branch}", H, "ref update", json={
        "sha": commit["sha"],
        "force": False,
    })
    return commit
