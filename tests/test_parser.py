"""Tests for h2md.parser module."""

import pytest

from h2md.errors import ErrorKind, ParseError
from h2md.nodes import NodeKind
from h2md.parser import decode_entities, parse, parse_attributes, parse_tag


class TestDecodeEntities:
    def test_known_entities(self):
        assert decode_entities("&quot;hi&quot; &apos;x&apos;") == "\"hi\" 'x'"
        assert decode_entities("a &lt; b &gt; c") == "a < b > c"
        assert decode_entities("a&nbsp;b") == "a b"

    def test_single_pass(self):
        assert decode_entities("&amp;lt;") == "&lt;"
        assert decode_entities("&amp;amp;") == "&amp;"

    def test_unknown_entity_untouched(self):
        assert decode_entities("&copy; 2026") == "&copy; 2026"

    def test_plain_text(self):
        assert decode_entities("nothing here") == "nothing here"


class TestParseTag:
    def test_name_only(self):
        assert parse_tag("div") == ("div", "")

    def test_name_and_attributes(self):
        assert parse_tag('a href="x"') == ("a", 'href="x"')

    def test_attributes_trimmed(self):
        assert parse_tag("p\n  class=x  ") == ("p", "class=x")


class TestParseAttributes:
    def test_quoted_and_unquoted(self):
        attrs = parse_attributes('href="https://e.com" target=_blank')
        assert attrs == {"href": "https://e.com", "target": "_blank"}

    def test_tokens_without_equals_ignored(self):
        assert parse_attributes("disabled class=a") == {"class": "a"}

    def test_last_write_wins(self):
        assert parse_attributes("a=1 a=2") == {"a": "2"}

    def test_empty_quoted_value(self):
        assert parse_attributes('alt=""') == {"alt": ""}

    def test_value_keeps_later_equals(self):
        assert parse_attributes("href=/search?q=x") == {"href": "/search?q=x"}

    def test_empty(self):
        assert parse_attributes("") == {}


class TestParse:
    def test_root_with_element_and_text(self):
        root = parse("<p>Hello</p>")
        assert root.kind is NodeKind.ROOT
        assert len(root.children) == 1
        p = root.children[0]
        assert p.kind is NodeKind.ELEMENT
        assert p.name == "p"
        assert p.children[0].kind is NodeKind.TEXT
        assert p.children[0].text == "Hello"

    def test_empty_input(self):
        root = parse("")
        assert root.kind is NodeKind.ROOT
        assert root.children == []

    def test_text_only(self):
        root = parse("just text")
        assert [c.text for c in root.children] == ["just text"]

    def test_nesting_follows_source(self):
        root = parse("<div><p>a</p><p>b</p></div>")
        div = root.children[0]
        assert [c.name for c in div.children] == ["p", "p"]
        assert div.children[1].children[0].text == "b"

    def test_attributes_from_opening_tag(self):
        root = parse('<a href="https://e.com" class=link>x</a>')
        assert root.children[0].attributes == {"href": "https://e.com", "class": "link"}

    def test_closing_tag_with_trailing_space(self):
        root = parse("<p class=a>x</p >")
        assert root.children[0].name == "p"

    def test_void_tag_takes_no_children(self):
        root = parse("<p>a<br>b</p>")
        p = root.children[0]
        assert [c.kind for c in p.children] == [
            NodeKind.TEXT, NodeKind.ELEMENT, NodeKind.TEXT,
        ]
        assert p.children[1].name == "br"
        assert p.children[1].children == []

    def test_void_siblings(self):
        root = parse('<div><img src="a.png"><img src="b.png"></div>')
        div = root.children[0]
        assert [c.attributes["src"] for c in div.children] == ["a.png", "b.png"]

    def test_xhtml_self_closing(self):
        root = parse('<div><br/><img src="x.png" alt="y" /></div>')
        div = root.children[0]
        assert [c.name for c in div.children] == ["br", "img"]
        assert div.children[1].attributes == {"src": "x.png", "alt": "y"}

    def test_unquoted_href_ending_in_slash(self):
        root = parse("<a href=https://e.com/>x</a>")
        a = root.children[0]
        assert a.attributes == {"href": "https://e.com/"}
        assert a.children[0].text == "x"

    def test_comment_skipped(self):
        root = parse("<p>a<!-- <b>x</b> -->b</p>")
        assert [c.text for c in root.children[0].children] == ["a", "b"]

    def test_empty_comment_forms(self):
        root = parse("<!--><p>a</p><!---><p>b</p><!-- c -->")
        assert [c.name for c in root.children] == ["p", "p"]
        assert root.children[1].children[0].text == "b"

    def test_deep_nesting_parses(self):
        root = parse("<div>" * 1000 + "x" + "</div>" * 1000)
        node = root
        for _ in range(1000):
            node = node.children[0]
        assert node.children[0].text == "x"

    def test_raw_text_tag_skipped(self):
        root = parse("<div><script>if (a < b) {}</script>x</div>")
        div = root.children[0]
        assert len(div.children) == 1
        assert div.children[0].text == "x"

    def test_raw_text_tag_with_attributes(self):
        html = '<script type="text/javascript">var x = "<p>";</script><p>y</p>'
        root = parse(html)
        assert [c.name for c in root.children] == ["p"]

    def test_style_and_title_skipped(self):
        root = parse("<title>T</title><style>p { color: red; }</style><p>x</p>")
        assert [c.name for c in root.children] == ["p"]

    def test_doctype_skipped(self):
        root = parse("<!DOCTYPE html><html><body>x</body></html>")
        assert [c.name for c in root.children] == ["html"]

    def test_entities_decoded_in_text(self):
        root = parse("<p>&amp;lt; &quot;q&quot;</p>")
        assert root.children[0].children[0].text == '&lt; "q"'

    def test_names_are_case_sensitive(self):
        root = parse("<DIV>x</DIV>")
        assert root.children[0].name == "DIV"

    def test_whitespace_text_kept(self):
        root = parse("<ul>\n  <li>a</li>\n</ul>")
        ul = root.children[0]
        assert ul.children[0].text == "\n  "


class TestParseErrors:
    def test_mismatched_closing_tag(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<div><p>text</div>")
        assert exc_info.value.kind is ErrorKind.MISMATCHED_TAG
        assert exc_info.value.tag == "div"
        assert exc_info.value.position == 12

    def test_closing_tag_without_opening(self):
        with pytest.raises(ParseError) as exc_info:
            parse("text</p>")
        assert exc_info.value.kind is ErrorKind.MISMATCHED_TAG

    def test_case_mismatch(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<P>x</p>")
        assert exc_info.value.kind is ErrorKind.MISMATCHED_TAG

    def test_unclosed_element_at_eof(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<div><p>text</p>")
        assert exc_info.value.kind is ErrorKind.UNCLOSED_ELEMENT_AT_EOF
        assert exc_info.value.tag == "div"

    def test_unterminated_tag(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<p>text</p")
        assert exc_info.value.kind is ErrorKind.UNTERMINATED_TAG

    def test_unterminated_comment(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<p><!-- x</p>")
        assert exc_info.value.kind is ErrorKind.UNTERMINATED_COMMENT

    def test_unterminated_raw_text_body(self):
        with pytest.raises(ParseError) as exc_info:
            parse("<div><script>var x = 1;</div>")
        assert exc_info.value.kind is ErrorKind.UNTERMINATED_TAG
        assert exc_info.value.tag == "script"

    def test_message_includes_offset(self):
        with pytest.raises(ParseError, match="offset 5"):
            parse("<div></p>")
