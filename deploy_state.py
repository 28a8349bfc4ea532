import sqlite3, time, hashlib
from pathlib import Path

def init_db(db_path):
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    con = sqlite3.connect(str(db_path))
    con.executescript("""
    CREATE TABLE IF NOT EXISTS deployed (
        path TEXT PRIMARY KEY,
        sha TEXT,
        deployed_at INTEGER
    );
    """)
    con.commit()
    return con

def sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()

def changed_files(con, files: dict[str, bytes]) -> dict[str, bytes]:
    """Subset of files whose content differs from the last recorded deploy."""
    known = dict(con.execute("SELECT path, sha FROM deployed").fetchall())
    return {p: data for p, data in files.items() if known.get(p) != sha1(data)}

def mark_deployed(con, files: dict[str, bytes]):
    now = int(time.time())
    con.executemany(
        "INSERT OR REPLACE INTO deployed (path, sha, deployed_at) VALUES (?, ?, ?)",
        [(p, sha1(data), now) for p, data in files.items()]
    )
    con.commit()

def removed_files(con, files: dict[str, bytes]) -> list[str]:
    """Paths recorded as deployed that the current build no longer produces."""
    rows = con.execute("SELECT path FROM deployed ORDER BY path").fetchall()
    return [p for (p,) in rows if p not in files]

def forget_deployed(con, paths: list[str]):
    con.executemany("DELETE FROM deployed WHERE path = ?", [(p,) for p in paths])
    con.commit()
