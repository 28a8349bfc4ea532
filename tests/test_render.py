"""
Rendering tests: the post template and listing pages.

Assertions are substring checks on the rendered HTML.
"""
import datetime

from content import find_post, load_posts, posts_by_tag
from render import make_env, render_blog_index, render_home, render_post, render_tags_index
from conftest import REPO


def env():
    return make_env(REPO / "templates", {"title": "Jane Doe", "nav": [], "head": []})


def make_post(**fm):
    base = {"title": "Hello <World>", "tags": ["Git", "Node.js"]}
    base.update(fm)
    return {"frontmatter": base, "slug": "/blog/hello/", "date": datetime.date(2024, 1, 5),
            "html": "<p>Body <em>here</em></p>"}


def test_post_page_header():
    html = render_post(env(), make_post())
    assert "<title>Hello &lt;World&gt; | Jane Doe</title>" in html
    assert '<h1 class="medium-heading">Hello &lt;World&gt;</h1>' in html
    assert "January 5, 2024</time>" in html
    assert "<span>&nbsp;&mdash;&nbsp;</span>" in html
    assert '<a href="/blog">Back to Blog</a>' in html


def test_post_tags_link_to_kebab_routes():
    html = render_post(env(), make_post())
    assert '<a href="/blog/tags/git/" class="tag">#Git</a>' in html
    assert '<a href="/blog/tags/node-js/" class="tag">#Node.js</a>' in html


def test_post_without_tags_has_no_tag_links():
    html = render_post(env(), make_post(tags=[]))
    assert 'class="tag"' not in html


def test_post_body_injected_unescaped():
    html = render_post(env(), make_post())
    assert "<p>Body <em>here</em></p>" in html


def test_blog_index_uses_description_or_excerpt(content_dir):
    posts = load_posts(content_dir)
    html = render_blog_index(env(), posts)
    assert "A Git clone." in html
    assert "First post." in html
    assert html.index("Building Lit") < html.index("An Older Post")


def test_tags_index_counts(content_dir):
    html = render_tags_index(env(), posts_by_tag(load_posts(content_dir)))
    assert '<a href="/blog/tags/git/">#Git <span class="count">(2)</span></a>' in html


def test_head_links_from_config():
    e = make_env(REPO / "templates", {"title": "J", "nav": [], "head": [
        {"tag": "link", "attrs": {"rel": "manifest", "href": "/site.webmanifest"}},
        {"tag": "meta", "attrs": {"name": "theme-color", "content": "#ffffff"}},
    ]})
    html = render_post(e, make_post())
    assert '<link rel="manifest" href="/site.webmanifest">' in html
    assert '<meta name="theme-color" content="#ffffff">' in html


def test_real_post_renders_through_content_query(content_dir):
    post = find_post(load_posts(content_dir), "/blog/lit")
    html = render_post(env(), post)
    assert "March 12, 2024" in html
    assert "alert(1)" not in html
    assert "<strong>hash</strong>" in html


def test_tag_with_empty_kebab_form_gets_no_link():
    html = render_post(env(), make_post(tags=["++", "Git"]))
    assert html.count('class="tag"') == 1
    assert '<a href="/blog/tags/git/" class="tag">#Git</a>' in html
    assert "/blog/tags//" not in html


def test_home_drops_script_urls_from_front_matter():
    job = {"frontmatter": {"title": "Engineer", "company": "Evil", "url": "javascript:alert(1)"},
           "html": "<p>x</p>"}
    project = {"frontmatter": {"title": "Lit", "external": "https://lit.example",
                               "github": " JaVaScRiPt:alert(2)"}, "html": "<p>y</p>"}
    html = render_home(env(), [job], {"featured": [project], "others": []}, [])
    assert "javascript" not in html.lower()
    assert "@ Evil</span>" in html
    assert '<a href="https://lit.example">Lit</a>' in html
    assert 'class="github"' not in html
