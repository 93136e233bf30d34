"""Unit tests for render.py: template substitution"""

import pytest

from mdblog.render import TemplateRenderer, render_template


def test_render_template_fills_placeholders():
    """Known keys are substituted wherever they appear."""
    assert render_template("<h1>{{title}}</h1><p>{{title}}</p>", title="Hi") == "<h1>Hi</h1><p>Hi</p>"


def test_render_template_does_not_expand_inserted_values():
    """Placeholders written inside a value are kept literally."""
    output = render_template(
        "<title>{{title}}</title><div>{{content}}</div>",
        title="Using {{content}} in Hugo",
        content="<p>BODY</p>",
    )
    assert output == "<title>Using {{content}} in Hugo</title><div><p>BODY</p></div>"


def test_render_template_content_cannot_pull_in_other_keys():
    """A body mentioning {{pagination}} is not replaced by the navigation."""
    output = render_template("{{posts}}{{pagination}}", posts="see {{pagination}}", pagination="<nav></nav>")
    assert output == "see {{pagination}}<nav></nav>"


def test_render_template_leaves_unknown_placeholders():
    """Placeholders without a value stay as written."""
    assert render_template("{{missing}} {{title}}", title="x") == "{{missing}} x"


def test_template_renderer_reads_named_template(tmp_path):
    """Templates are looked up by name in the templates directory."""
    (tmp_path / "post.html").write_text("<h1>{{title}}</h1>", encoding="utf-8")
    assert TemplateRenderer(tmp_path).render("post", title="Hello") == "<h1>Hello</h1>"


def test_template_renderer_missing_template(tmp_path):
    """A missing template raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        TemplateRenderer(tmp_path).read("index")
