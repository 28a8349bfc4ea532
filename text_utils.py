import re, datetime, unicodedata
from bs4 import BeautifulSoup

_MONTHS = ["January", "February", "March", "April", "May", "June", "July",
           "August", "September", "October", "November", "December"]

_RUN_RE = re.compile(r"[^\W_]+")
# ordinals stay one word: 1st, 22nd, 4TH
_ORDINAL_RE = re.compile(r"\d*(?:1st|2nd|3rd|(?![123])\dth)(?=$|[A-Z])|\d*(?:1ST|2ND|3RD|(?![123])\dTH)(?=$|[a-z])")
# over letter shapes (U upper, L lower or caseless, D digit):
# acronym before a capitalised word, capitalised/lower word, bare acronym, digits
_SHAPE_RE = re.compile(r"U+(?=UL)|U?L+|U+|D+")


class ContentError(ValueError):
    pass


def clean_text(txt: str) -> str:
    return re.sub(r"\s+", " ", txt).strip()

def token_trim(s: str, max_chars: int) -> str:
    s = s.strip()
    return s if len(s) <= max_chars else s[:max_chars-1].rstrip() + "…"

def deburr(s: str) -> str:
    s = unicodedata.normalize("NFKD", s)
    return "".join(c for c in s if not unicodedata.combining(c))

def _shape(c: str) -> str:
    if c.isdigit():
        return "D"
    return "U" if c.isupper() else "L"

def _words(run: str) -> list[str]:
    shape = "".join(_shape(c) for c in run)
    words, i = [], 0
    while i < len(run):
        m = _ORDINAL_RE.match(run, i) or _SHAPE_RE.match(shape, i)
        words.append(run[i:m.end()])
        i = m.end()
    return words

def kebab_case(s) -> str:
    """lodash-style kebabCase: 'Node.js' -> 'node-js', 'GraphQL' -> 'graph-ql', 'Привет мир' -> 'привет-мир'."""
    s = deburr(str(s or "")).replace("'", "").replace("’", "")
    return "-".join(w.lower() for run in _RUN_RE.findall(s) for w in _words(run))

def parse_date(value) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and value.strip():
        v = value.strip().replace("Z", "+00:00")
        try:
            return datetime.datetime.fromisoformat(v).date()
        except ValueError:
            pass
        try:
            return datetime.date.fromisoformat(v[:10])
        except ValueError:
            pass
    raise ContentError(f"invalid date: {value!r}")

def format_long_date(value) -> str:
    d = parse_date(value)
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"

def excerpt(html: str, max_chars: int = 160) -> str:
    text = BeautifulSoup(html or "", "lxml").get_text(" ", strip=True)
    return token_trim(clean_text(text), max_chars)
