from functools import partial

import pytest

from html5update import (
    InvalidInputError,
    fix_internal_links,
    fix_repeated_source_divisions,
    remove_class_from,
    remove_dead_links,
    remove_external_link_class,
    remove_external_links,
    remove_no_href_links,
    remove_points_from_attribute,
    retag_selector,
    transform_icons,
    transform_images_to_figures,
    update_code_sections,
    update_section_div,
    update_section_divisions,
    update_tables,
)


PAGE = """\
<div class="section">
  <h2><a name="Usage"></a>Usage</h2>
  <p>Add the <a class="externalLink" href="https://maven.apache.org/">Maven</a>
     dependency:</p>
  <img src="images/add.gif" alt="added">
  <div class="source"><div class="source"><pre>&lt;dep/&gt;</pre></div></div>
  <table border="0" class="bodyTable">
    <tr class="a"><th>Name</th><th>Version</th></tr>
    <tr class="b"><td>core</td><td>1.0</td></tr>
    <tr class="a"><td>api</td><td>1.1</td></tr>
  </table>
  <h3 id="usage.example">Example</h3>
  <p><a href="#usage.example">See the example</a>.</p>
</div>
"""


PIPELINES = (
    fix_internal_links,
    fix_repeated_source_divisions,
    partial(remove_class_from, selector="p.lead", class_name="lead"),
    remove_dead_links,
    remove_external_link_class,
    partial(remove_points_from_attribute, selector="[name]", attribute="name"),
    partial(retag_selector, selector="div.note", tag="aside", class_name="note"),
    transform_icons,
    transform_images_to_figures,
    update_code_sections,
    update_section_divisions,
    update_tables,
)


@pytest.mark.parametrize(
    ("markup", "result"),
    (
        (
            '<a class="externalLink class1" href="https://x/">A link</a>',
            '<a class="class1" href="https://x/">A link</a>',
        ),
        (
            '<a class="externalLink" href="https://x/">A link</a>',
            '<a href="https://x/">A link</a>',
        ),
        (
            '<a href="https://x/">A link</a>',
            '<a href="https://x/">A link</a>',
        ),
    ),
)
def test_remove_external_link_class(markup, result):
    assert remove_external_link_class(markup) == result


def test_update_section_divisions():
    assert update_section_divisions(
        '<div class="section testClass"><p>Some text</p></div>'
    ) == ('<section class="testClass">\n <p>Some text</p>\n</section>')


def test_only_the_body_of_a_document_is_returned():
    assert update_section_divisions(
        '<?xml version="1.0" encoding="UTF-8"?>\n<!DOCTYPE html>'
        '<html><head><title>T</title><link rel="stylesheet" href="s.css"></head>'
        '<body><div class="section"><p>x</p></div></body></html>'
    ) == ("<section>\n <p>x</p>\n</section>")


def test_fix_repeated_source_divisions():
    assert fix_repeated_source_divisions(
        '<div class="source"><div class="source"><pre>Some code</pre></div></div>'
    ) == ('<div class="source">\n <pre>Some code</pre>\n</div>')


def test_fix_repeated_source_divisions_is_lossy():
    assert fix_repeated_source_divisions(
        '<div class="source"><p>Lost</p>'
        '<div class="source"><pre>Some code</pre></div></div>'
    ) == ('<div class="source">\n <pre>Some code</pre>\n</div>')


@pytest.mark.parametrize(
    "markup",
    (
        '<div class="source"><pre>Some code</pre></div>',
        '<div class="source"><div class="source"><pre>Some code</pre></div></div>',
        '<div class="source"><div class="source"><div class="source">'
        "<pre>Some code</pre></div></div></div>",
    ),
)
def test_update_code_sections(markup):
    assert update_code_sections(markup) == "<pre><code>Some code</code></pre>"


def test_update_code_sections_keeps_whitespace():
    assert update_code_sections(
        '<div class="source">\n<pre>  a = 1\n\n  b = 2\n</pre></div>'
    ) == ("<pre><code>  a = 1\n\n  b = 2\n</code></pre>")


def test_update_tables():
    assert update_tables(
        '<table border="0" class="bodyTable">'
        '<tr class="a"><th>Name</th></tr>'
        '<tr class="b"><td>core</td></tr>'
        '<tr class="a x"><td>api</td></tr>'
        "</table>"
    ) == (
        "<table>\n"
        " <thead>\n"
        "  <tr>\n"
        "   <th>Name</th>\n"
        "  </tr>\n"
        " </thead>\n"
        " <tbody>\n"
        "  <tr>\n"
        "   <td>core</td>\n"
        "  </tr>\n"
        '  <tr class="x">\n'
        "   <td>api</td>\n"
        "  </tr>\n"
        " </tbody>\n"
        "</table>"
    )


def test_update_tables_keeps_other_classes():
    assert update_tables('<table class="bodyTable wide"></table>') == (
        '<table class="wide"></table>'
    )


def test_fix_internal_links():
    assert fix_internal_links(
        '<h2 id="a.b">Heading</h2><p><a href="#a.b">local</a> '
        '<a href="https://x.org/a.b">remote</a></p>'
    ) == (
        '<h2 id="ab">Heading</h2>\n'
        '<p><a href="#ab">local</a> <a href="https://x.org/a.b">remote</a></p>'
    )


def test_remove_points_from_attribute():
    assert remove_points_from_attribute(
        '<a name="a_heading" href="a.b.c">Text</a>', "[href]", "href"
    ) == ('<a name="a_heading" href="abc">Text</a>')


def test_remove_dead_links():
    assert remove_dead_links(
        '<p>Some <a name="x">named</a> text, <a href="#x">linked</a>.</p>'
    ) == ('<p>Some named text, <a href="#x">linked</a>.</p>')


def test_remove_class_from():
    assert remove_class_from('<p class="lead x">a</p>', "p.lead", "lead") == (
        '<p class="x">a</p>'
    )
    assert remove_class_from('<p class="lead">a</p>', "p", "lead") == "<p>a</p>"


def test_retag_selector():
    assert retag_selector(
        '<div class="note x">a</div>', "div.note", "aside", "note"
    ) == ('<aside class="x">\n a\n</aside>')
    assert retag_selector('<p><b class="x">a</b></p>', "b", "strong") == (
        '<p><strong class="x">a</strong></p>'
    )


def test_transform_images_to_figures():
    assert transform_images_to_figures(
        '<img src="imgs/diagram.png" alt="A diagram">'
    ) == (
        "<figure>\n"
        ' <img src="imgs/diagram.png" alt="A diagram">\n'
        " <figcaption>\n"
        "  A diagram\n"
        " </figcaption>\n"
        "</figure>"
    )
    assert transform_images_to_figures('<img src="imgs/diagram.png">') == (
        '<figure>\n <img src="imgs/diagram.png">\n</figure>'
    )
    assert transform_images_to_figures('<img src="imgs/diagram.png" alt=" ">') == (
        '<figure>\n <img src="imgs/diagram.png" alt=" ">\n</figure>'
    )


def test_transform_images_to_figures_skips_figures():
    markup = '<figure>\n <div>\n  <img src="a.png">\n </div>\n</figure>'
    assert transform_images_to_figures(markup) == markup


def test_deprecated_aliases():
    with pytest.warns(DeprecationWarning):
        assert update_section_div('<div class="section"></div>') == (
            "<section></section>"
        )
    with pytest.warns(DeprecationWarning):
        assert remove_external_links('<a class="externalLink">x</a>') == "<a>x</a>"
    with pytest.warns(DeprecationWarning):
        assert remove_no_href_links("<p><a>x</a></p>") == "<p>x</p>"


@pytest.mark.parametrize("pipeline", PIPELINES)
def test_empty_input(pipeline):
    assert pipeline("") == ""


@pytest.mark.parametrize("pipeline", PIPELINES)
def test_idempotence(pipeline):
    result = pipeline(PAGE)
    assert pipeline(result) == result


@pytest.mark.parametrize("pipeline", PIPELINES)
def test_no_match(pipeline):
    markup = "<p>Some <em>text</em>.</p>"
    assert pipeline(markup) == markup


@pytest.mark.parametrize("pipeline", PIPELINES)
def test_invalid_input(pipeline):
    with pytest.raises(InvalidInputError):
        pipeline(b"<p>\xff</p>")


def test_page():
    result = update_section_divisions(PAGE)
    for pipeline in PIPELINES:
        result = pipeline(result)

    assert result == (
        "<section>\n"
        " <h2>Usage</h2>\n"
        ' <p>Add the <a href="https://maven.apache.org/">Maven</a> dependency:</p>\n'
        ' <span><span class="fa fa-plus" aria-hidden="true"></span>'
        '<span class="sr-only">Addition</span></span>\n'
        " <pre><code>&lt;dep/&gt;</code></pre>\n"
        " <table>\n"
        "  <thead>\n"
        "   <tr>\n"
        "    <th>Name</th>\n"
        "    <th>Version</th>\n"
        "   </tr>\n"
        "  </thead>\n"
        "  <tbody>\n"
        "   <tr>\n"
        "    <td>core</td>\n"
        "    <td>1.0</td>\n"
        "   </tr>\n"
        "   <tr>\n"
        "    <td>api</td>\n"
        "    <td>1.1</td>\n"
        "   </tr>\n"
        "  </tbody>\n"
        " </table>\n"
        ' <h3 id="usageexample">Example</h3>\n'
        ' <p><a href="#usageexample">See the example</a>.</p>\n'
        "</section>"
    )


@pytest.mark.parametrize(
    "pipeline",
    (
        fix_internal_links,
        fix_repeated_source_divisions,
        remove_class_from,
        remove_dead_links,
        remove_external_link_class,
        remove_points_from_attribute,
        retag_selector,
        transform_icons,
        transform_images_to_figures,
        update_code_sections,
        update_section_divisions,
        update_tables,
    ),
)
def test_pipelines_are_documented(pipeline):
    assert pipeline.__doc__
