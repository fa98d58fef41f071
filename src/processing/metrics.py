"""
Prometheus Metrics — pipeline observability.

Exposes counters and histograms for:
- Message classification outcome (forward / signature / plain / empty)
- HTML normalization and forward marker style distribution
- Per-stage processing latency
- Presentation toggle clicks
- Render tree schema violations

Metrics are only recorded on pipeline cache misses.

Usage
-----
    from src.processing.metrics import record_classification, timed_stage

    with timed_stage("signature_segmenter"):
        separated = separate_signature(text)

    record_classification("signature")
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metric definitions
# ---------------------------------------------------------------------------

# Processed bodies by classification outcome.
MESSAGES_PROCESSED: Counter = Counter(
    "message_pipeline_messages_total",
    "Message bodies processed, by classification outcome",
    ["classification"],
)

# Bodies that went through the HTML normalizer.
HTML_NORMALIZED: Counter = Counter(
    "message_pipeline_html_normalized_total",
    "Message bodies converted from HTML to plain text",
)

# Which forwarding marker matched.
FORWARD_STYLE: Counter = Counter(
    "message_pipeline_forward_style_total",
    "Forwarded bodies by marker style (gmail / apple_mail / outlook / generic)",
    ["style"],
)

# Processing latency per stage (seconds).
STAGE_LATENCY: Histogram = Histogram(
    "message_pipeline_stage_seconds",
    "Processing time per pipeline stage in seconds",
    ["stage"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
)

# User toggle clicks on collapsible sections.
TOGGLE_CLICKS: Counter = Counter(
    "message_pipeline_toggle_clicks_total",
    "Presentation toggle clicks by section (quoted / signature / source)",
    ["section"],
)

# Render trees that failed schema validation.
RENDER_TREE_VIOLATIONS: Counter = Counter(
    "message_pipeline_render_tree_violations_total",
    "Composed render trees that failed schema validation",
)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------

def record_classification(classification: str) -> None:
    """Increment the processed counter for *classification*."""
    MESSAGES_PROCESSED.labels(classification=classification).inc()


def record_html_normalized() -> None:
    HTML_NORMALIZED.inc()


def record_forward_style(style: str) -> None:
    """Increment the forward style counter for *style*."""
    FORWARD_STYLE.labels(style=style).inc()


def record_toggle(section: str) -> None:
    """Increment the toggle click counter for *section*."""
    TOGGLE_CLICKS.labels(section=section).inc()


def record_render_tree_violation() -> None:
    RENDER_TREE_VIOLATIONS.inc()


@contextmanager
def timed_stage(stage: str) -> Generator[None, None, None]:
    """
    Context manager that records stage processing latency.

    Usage::

        with timed_stage("html_normalizer"):
            text = normalize_html(body)
    """
    with STAGE_LATENCY.labels(stage=stage).time():
        yield
