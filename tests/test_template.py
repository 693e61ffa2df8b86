from vibeblog.template import Section, Text, Var, parse, render, tokenize


def test_repeated_block_over_list():
    template = "{{#tags}}<span>{{.}}</span>{{/tags}}"
    assert render(template, {"tags": ["a", "b"]}) == "<span>a</span><span>b</span>"


def test_repeated_block_empty_or_absent():
    template = "{{#tags}}<span>{{.}}</span>{{/tags}}"
    assert render(template, {"tags": []}) == ""
    assert render(template, {}) == ""


def test_repeated_block_non_sequence_renders_nothing():
    template = "before{{#tags}}<span>{{.}}</span>{{/tags}}after"
    assert render(template, {"tags": "python"}) == "beforeafter"
    assert render(template, {"tags": None}) == "beforeafter"


def test_placeholder_substitution():
    assert render("<h1>{{title}}</h1>", {"title": "Hello"}) == "<h1>Hello</h1>"
    assert render("{{a}}-{{a}}", {"a": 1}) == "1-1"


def test_empty_values_become_empty_string():
    assert render("[{{title}}]", {"title": None}) == "[]"
    assert render("[{{title}}]", {"title": ""}) == "[]"


def test_unknown_placeholder_passes_through():
    assert render("{{title}} {{author}}", {"title": "T"}) == "T {{author}}"


def test_sequence_placeholder_joins_items():
    assert render("{{tags}}", {"tags": ["a", "b"]}) == "a,b"


def test_outer_keys_inside_block():
    template = '{{#tags}}<a href="{{basePath}}/tags/{{.}}">{{.}}</a>{{/tags}}'
    data = {"tags": ["x", "y"], "basePath": "/sub"}
    assert render(template, data) == '<a href="/sub/tags/x">x</a><a href="/sub/tags/y">y</a>'


def test_block_spans_lines():
    template = "<ul>\n{{#items}}\n  <li>{{.}}</li>\n{{/items}}\n</ul>"
    assert render(template, {"items": [1, 2]}) == "<ul>\n\n  <li>1</li>\n\n  <li>2</li>\n\n</ul>"


def test_values_are_not_rescanned():
    assert render("{{content}}", {"content": "{{title}}", "title": "T"}) == "{{title}}"


def test_unclosed_and_stray_tags_are_literal():
    assert render("{{#tags}}<b>{{.}}</b>", {"tags": ["a"]}) == "{{#tags}}<b>{{.}}</b>"
    assert render("x{{/tags}}y", {"tags": ["a"]}) == "x{{/tags}}y"


def test_unclosed_inner_block_inside_closed_block():
    template = "{{#a}}[{{.}}{{#b}}]{{/a}}"
    assert render(template, {"a": ["1", "2"]}) == "[1{{#b}}][2{{#b}}]"


def test_dot_outside_block_is_literal():
    assert render("{{.}}", {}) == "{{.}}"


def test_render_is_idempotent():
    template = "<h1>{{title}}</h1>{{#tags}}<i>{{.}}</i>{{/tags}}"
    data = {"title": "T", "tags": ["a"]}
    assert render(template, data) == render(template, data)


def test_tokenize_and_parse_structure():
    tokens = tokenize("a{{x}}{{#t}}{{.}}{{/t}}{{ y }}")
    assert [token.kind for token in tokens] == ["text", "var", "open", "var", "close", "text"]
    nodes = parse("a{{x}}{{#t}}{{.}}{{/t}}")
    assert nodes == [Text("a"), Var("x", "{{x}}"), Section("t", (Var(".", "{{.}}"),))]
