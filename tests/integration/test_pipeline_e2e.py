"""
Integration tests — raw body through to the serialized render tree.
"""
import pytest
from prometheus_client import REGISTRY

from src.config import settings
from src.processing.pipeline import cache_info, process_message, render_markdown, render_message
from src.rendering.inline_renderer import plain_text_of


def _texts(lines):
    return [plain_text_of(line) for line in lines]


class TestForwardedMessages:
    """Forwarded bodies, one per marker style."""

    def test_forward_split(self, forward_case):
        style, body = forward_case
        message = process_message(body)

        assert message.classification == "forward"
        assert message.forward.style == style
        assert _texts(message.main_lines) == ["Hi,"]
        assert message.signature_lines == ()

    def test_forward_render_tree(self, forward_case):
        _, body = forward_case
        controller = render_message(body)
        controller.toggle_quoted()
        data = controller.to_dict()

        assert data["quoted"]["expanded"] is True
        assert data["quoted"]["headers"] == {"from": "a@b.com", "subject": "X"}
        assert data["signature"] is None
        assert data["quoted"]["lines"][-1] == [{"kind": "text", "text": "Body text"}]

    def test_html_wrapped_forward(self):
        body = (
            "<div>Hi,</div>"
            "<div>---------- Forwarded message ----------</div>"
            "<div>From: a@b.com</div>"
            "<div>Body</div>"
        )
        message = process_message(body)

        assert message.forward is not None
        assert message.forward.style == "gmail"
        assert message.forward.quoted_from == "a@b.com"
        assert _texts(message.main_lines) == ["Hi,"]


class TestSignatures:
    def test_personal_signature(self, personal_signature_body):
        controller = render_message(personal_signature_body)
        assert _texts(controller.render().main) == ["Thanks for reaching out."]

        controller.toggle_signature()
        assert _texts(controller.render().signature.lines) == [
            "John Smith", "Acme Inc", "555-123-4567",
        ]

    def test_marketing_footer(self, marketing_footer_body):
        message = process_message(marketing_footer_body)
        assert message.classification == "signature"
        assert _texts(message.main_lines) == ["Your ticket #123 has a new reply."]
        assert len(message.signature_lines) == 4

    def test_all_signature_body_kept_whole(self, all_signature_body):
        controller = render_message(all_signature_body)
        assert controller.visible_toggles == []
        assert _texts(controller.render().main) == ["John Smith", "555-123-4567"]


class TestHtmlBodies:
    def test_html_body(self, html_body):
        message = process_message(html_body)

        assert message.was_transformed
        assert _texts(message.main_lines) == [
            "Hello & welcome,",
            "See the docs.",
            "Chart: [chart]",
        ]
        assert _texts(message.signature_lines) == ["---", "Jane Doe", "+1 415-555-0100"]

    def test_entities_decoded_after_tag_stripping(self):
        message = process_message("<p>&lt;b&gt; 5 &lt; 6 &amp;&amp; &#169; &quot;x&quot;</p>")
        assert _texts(message.main_lines) == ['<b> 5 < 6 && © "x"']

    def test_source_round_trip_is_byte_identical(self):
        body = "<div>Line one&nbsp;</div>\r\n<div><b>two</b></div>\r\n"
        controller = render_message(body, show_source_toggle=True)
        controller.toggle_source()
        assert controller.to_dict()["source"]["text"] == body


class TestInlineContent:
    def test_long_url_truncated_with_full_title(self):
        url = "https://example.com/a/very/long/path/that/keeps/going/and/going/forever.html"
        line = process_message(f"Read {url} now").main_lines[0]
        link = line[1]

        assert link.href == url
        assert link.title == url
        assert len(link.display_text) <= 50
        assert "…" in link.display_text
        assert line[-1].text == " now"

    def test_custom_url_budget(self):
        url = "https://example.com/" + "x" * 40
        link = process_message(url, max_url_length=20).main_lines[0][0]
        assert len(link.display_text) <= 20

    def test_blank_lines_keep_height(self):
        message = process_message("first\n\nsecond")
        assert _texts(message.main_lines) == ["first", "\u00a0", "second"]


class TestEdgeInputs:
    @pytest.mark.parametrize("content", ["", "   \n\t ", None, "<div>  </div>"])
    def test_empty_bodies(self, content):
        message = process_message(content)
        assert message.classification == "empty"
        assert render_message(content).to_dict()["main"] == []

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            process_message(123)

    def test_url_budget_too_small(self):
        with pytest.raises(ValueError):
            process_message("text", max_url_length=1)

    @pytest.mark.parametrize("content", [None, "", "text"])
    def test_url_budget_checked_before_content(self, content):
        with pytest.raises(ValueError):
            process_message(content, max_url_length=0)
        with pytest.raises(ValueError):
            render_markdown(content, max_url_length=0)


class TestMemoization:
    def test_same_object_returned(self, personal_signature_body):
        first = process_message(personal_signature_body)
        second = process_message(personal_signature_body)

        assert first is second
        assert cache_info().hits == 1
        assert cache_info().misses == 1

    def test_url_budget_is_part_of_key(self):
        assert process_message("x", 30) is not process_message("x", 40)


class TestRenderMarkdown:
    def test_no_email_heuristics(self, all_signature_body):
        lines = render_markdown(all_signature_body)
        assert _texts(lines) == ["John Smith", "555-123-4567"]

    def test_html_not_interpreted(self):
        lines = render_markdown("<p>hi</p>")
        assert _texts(lines) == ["<p>hi</p>"]

    def test_empty(self):
        assert render_markdown(None) == ()


class TestRenderTreeValidation:
    def test_validation_on_serialize(self, monkeypatch, html_body):
        monkeypatch.setattr(settings, "VALIDATE_RENDER_TREE", True)
        name = "message_pipeline_render_tree_violations_total"
        before = REGISTRY.get_sample_value(name) or 0.0

        controller = render_message(html_body, show_source_toggle=True)
        for toggle in (controller.toggle_signature, controller.toggle_source):
            toggle()
            controller.to_dict()

        assert (REGISTRY.get_sample_value(name) or 0.0) == before
