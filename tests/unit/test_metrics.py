"""
Unit tests for pipeline metrics recording.
"""
from prometheus_client import REGISTRY

from src.processing.metrics import record_toggle, timed_stage
from src.processing.pipeline import process_message, render_message


def _sample(name, labels=None):
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetrics:
    def test_toggle_clicks_counted(self, forward_case):
        _, body = forward_case
        before = _sample("message_pipeline_toggle_clicks_total", {"section": "quoted"})

        controller = render_message(body)
        controller.toggle_quoted()
        controller.toggle_quoted()

        after = _sample("message_pipeline_toggle_clicks_total", {"section": "quoted"})
        assert after - before == 2

    def test_hidden_toggle_not_counted(self):
        before = _sample("message_pipeline_toggle_clicks_total", {"section": "signature"})
        render_message("Nothing to fold here").toggle_signature()
        assert _sample("message_pipeline_toggle_clicks_total", {"section": "signature"}) == before

    def test_classification_recorded_once_per_cache_miss(self, personal_signature_body):
        labels = {"classification": "signature"}
        before = _sample("message_pipeline_messages_total", labels)

        process_message(personal_signature_body)
        process_message(personal_signature_body)

        assert _sample("message_pipeline_messages_total", labels) - before == 1

    def test_forward_style_recorded(self, forward_case):
        style, body = forward_case
        before = _sample("message_pipeline_forward_style_total", {"style": style})
        process_message(body)
        assert _sample("message_pipeline_forward_style_total", {"style": style}) - before == 1

    def test_html_normalized_recorded(self, html_body):
        before = _sample("message_pipeline_html_normalized_total")
        process_message(html_body)
        assert _sample("message_pipeline_html_normalized_total") - before == 1

    def test_timed_stage_observes(self):
        before = _sample("message_pipeline_stage_seconds_count", {"stage": "test_stage"})
        with timed_stage("test_stage"):
            pass
        assert _sample("message_pipeline_stage_seconds_count", {"stage": "test_stage"}) - before == 1

    def test_record_toggle_helper(self):
        before = _sample("message_pipeline_toggle_clicks_total", {"section": "source"})
        record_toggle("source")
        assert _sample("message_pipeline_toggle_clicks_total", {"section": "source"}) - before == 1
