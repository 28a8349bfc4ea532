import re, markdown
from bs4 import BeautifulSoup

MD_EXTENSIONS = ["fenced_code", "tables", "md_in_html", "sane_lists"]

# dropped together with everything inside them
STRIP_WITH_CONTENT = ["script", "style", "noscript", "iframe", "object", "embed", "form", "template"]

ALLOWED_TAGS = {
    "a", "abbr", "b", "blockquote", "br", "code", "dd", "del", "div", "dl", "dt", "em",
    "figcaption", "figure", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "kbd",
    "li", "ol", "p", "pre", "s", "span", "strong", "sub", "sup", "table", "tbody", "td",
    "tfoot", "th", "thead", "tr", "ul", "time",
}

GLOBAL_ATTRS = {"class", "id", "title"}
ALLOWED_ATTRS = {
    "a": {"href", "rel", "target"},
    "img": {"src", "alt", "width", "height", "loading"},
    "td": {"align", "colspan", "rowspan"},
    "th": {"align", "colspan", "rowspan", "scope"},
    "ol": {"start"},
    "time": {"datetime"},
}

_BAD_SCHEME_RE = re.compile(r"^\s*(javascript|vbscript|data):", re.I)


def is_safe_url(tag_name: str, url: str) -> bool:
    # strip control chars and whitespace browsers ignore inside schemes
    compact = re.sub(r"[\x00-\x20]+", "", url)
    if not _BAD_SCHEME_RE.match(compact):
        return True
    return tag_name == "img" and compact.lower().startswith("data:image/")

def sanitize_html(html: str) -> str:
    soup = BeautifulSoup(html or "", "lxml")
    for tag in soup(STRIP_WITH_CONTENT):
        tag.decompose()

    body = soup.body
    if body is None:
        return ""

    for tag in body.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        allowed = GLOBAL_ATTRS | ALLOWED_ATTRS.get(tag.name, set())
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag[attr]
            elif attr in ("href", "src") and not is_safe_url(tag.name, tag[attr]):
                del tag[attr]
        if tag.get("target") == "_blank":
            tag["rel"] = "noopener noreferrer"

    return body.decode_contents().strip()

def markdown_to_html(text: str) -> str:
    html = markdown.markdown(text or "", extensions=MD_EXTENSIONS, output_format="html")
    return sanitize_html(html)
