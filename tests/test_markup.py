from markup import markdown_to_html, sanitize_html


def test_markdown_tables_and_fenced_code():
    html = markdown_to_html("| a | b |\n| --- | --- |\n| 1 | 2 |\n\n```\nlit log\n```\n")
    assert "<table>" in html
    assert "<td>1</td>" in html
    assert "<pre><code>lit log" in html


def test_highlight_box_keeps_class_and_renders_inner_markdown():
    html = markdown_to_html('<div class="highlight-box" markdown="1">\n**Key idea**\n</div>\n')
    assert 'class="highlight-box"' in html
    assert "<strong>Key idea</strong>" in html
    assert "markdown=" not in html


def test_scripts_and_event_handlers_are_removed():
    html = sanitize_html('<p onclick="x()">hi</p><script>alert(1)</script><style>p{}</style>')
    assert html == "<p>hi</p>"


def test_dangerous_urls_are_dropped():
    html = sanitize_html('<a href="javascript:alert(1)">x</a><a href="https://ok.example">y</a>')
    assert 'href="javascript' not in html
    assert 'href="https://ok.example"' in html
    sneaky = sanitize_html('<a href="java\tscript:alert(1)">x</a>')
    assert "script" not in sneaky
    assert ">x</a>" in sneaky


def test_data_urls_only_allowed_for_images():
    assert 'src="data:image/png;base64,AAA"' in sanitize_html('<img src="data:image/png;base64,AAA" alt="">')
    assert "data:text" not in sanitize_html('<a href="data:text/html,boom">x</a>')


def test_unknown_tags_are_unwrapped_not_dropped():
    assert sanitize_html("<p><blink>still here</blink></p>") == "<p>still here</p>"


def test_target_blank_gets_noopener():
    html = sanitize_html('<a href="https://x.example" target="_blank">x</a>')
    assert 'rel="noopener noreferrer"' in html


def test_empty_input():
    assert markdown_to_html("") == ""
    assert sanitize_html("") == ""
