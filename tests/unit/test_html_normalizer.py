"""
Unit tests for the HTML normalizer.
"""
from src.normalization.html_normalizer import (
    collapse_whitespace,
    decode_entities,
    normalize_html,
)


class TestEntities:
    """Tests for decode_entities."""

    def test_named_entities(self):
        assert normalize_html("A &amp; B &lt;tag&gt;") == "A & B <tag>"

    def test_full_entity_table(self):
        text = "&nbsp;&quot;&#39;&copy;&reg;&trade;"
        assert decode_entities(text) == " \"'©®™"

    def test_numeric_reference(self):
        assert decode_entities("caf&#233;") == "café"

    def test_single_pass_no_double_decoding(self):
        assert decode_entities("&amp;lt;") == "&lt;"

    def test_out_of_range_reference_left_as_text(self):
        assert decode_entities("x&#99999999999;y") == "x&#99999999999;y"

    def test_unknown_entity_passes_through(self):
        assert decode_entities("&hellip;") == "&hellip;"


class TestStructure:
    """Tests for block breaks, links and images."""

    def test_paragraphs_become_lines(self):
        assert normalize_html("<p>One</p><p>Two</p>") == "One\nTwo"

    def test_br_and_div(self):
        assert normalize_html("<div>a<br>b<br/>c</div>") == "a\nb\nc"

    def test_hr_separator(self):
        assert normalize_html("<p>above</p><hr><p>below</p>") == "above\n\n---\nbelow"

    def test_headings_and_list_items(self):
        html = "<h1>Title</h1><ul><li>one</li><li>two</li></ul>"
        assert normalize_html(html) == "Title\none\ntwo"

    def test_style_and_script_removed_with_content(self):
        html = "<style>.a{color:red}</style><p>Hi</p><script>alert(1)</script>"
        assert normalize_html(html) == "Hi"

    def test_anchor_to_markdown(self):
        html = '<p>Read <a href="https://example.com/a">this</a> now</p>'
        assert normalize_html(html) == "Read [this](https://example.com/a) now"

    def test_anchor_without_href_keeps_text(self):
        assert normalize_html('<a name="top">Top</a>') == "Top"

    def test_linked_image_uses_alt_as_label(self):
        html = '<a href="https://acme.example"><img src="logo.png" alt="Logo"></a>'
        assert normalize_html(html) == "[Logo](https://acme.example)"

    def test_image_src_then_alt(self):
        assert normalize_html('<img src="a.png" alt="A">') == "![A](a.png)"

    def test_image_alt_then_src(self):
        assert normalize_html("<img alt='B' src='b.png'/>") == "![B](b.png)"

    def test_image_without_alt(self):
        assert normalize_html('<img src="c.png">') == "![](c.png)"

    def test_image_without_src_dropped(self):
        assert normalize_html('<p>x<img alt="none">y</p>') == "xy"

    def test_href_entities_decoded(self):
        html = '<a href="https://x.io/?a=1&amp;b=2">q</a>'
        assert normalize_html(html) == "[q](https://x.io/?a=1&b=2)"

    def test_prefixed_attributes_ignored(self):
        html = '<p><img data-src="lazy.png" src="https://x.io/real.png" alt="r"></p>'
        assert normalize_html(html) == "![r](https://x.io/real.png)"

    def test_prefixed_href_and_alt_ignored(self):
        assert normalize_html('<a data-href="x" href="https://x.io">go</a>') == "[go](https://x.io)"
        assert normalize_html('<img data-alt="no" alt="yes" src="a.png">') == "![yes](a.png)"


class TestWhitespaceAndFailOpen:
    """Tests for whitespace cleanup and permissive handling."""

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  a \t  b  \n\n\n\n  c  ") == "a b\n\nc"

    def test_crlf_normalized(self):
        assert collapse_whitespace("a\r\nb\rc") == "a\nb\nc"

    def test_unclosed_tag_passes_through(self):
        assert normalize_html("<p>5 < 6 and <b") == "5 < 6 and <b"

    def test_empty_input(self):
        assert normalize_html("") == ""

    def test_unknown_tags_stripped(self):
        assert normalize_html("<p><strong>Bold</strong> <em>it</em></p>") == "Bold it"
