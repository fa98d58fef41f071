"""
Pipeline Orchestrator — raw message body → ProcessedMessage → controller.

Executes the stages in order:
    1. Format classification
    2. HTML normalization (HTML-flavored bodies only)
    3. Forward splitting
    4. Signature segmentation (non-forwarded bodies only)
    5. Inline rendering of every resulting block

Every stage is a pure function of the input string, so the result is
memoized on (content, max_url_length). Each call to render_message() gets
its own PresentationController; only the immutable ProcessedMessage is
shared.
"""
import logging
import time
from functools import lru_cache
from typing import Optional, Tuple

from src.config.settings import (
    MAX_BODY_LOG_CHARS,
    MAX_URL_DISPLAY_LENGTH,
    RENDER_CACHE_SIZE,
    SHOW_SOURCE_TOGGLE_DEFAULT,
)
from src.models.message_parts import SeparatedContent
from src.models.processed_message import ProcessedMessage
from src.models.raw_body import RawBody
from src.models.render_nodes import RenderLine
from src.normalization.forward_splitter import split_forward
from src.normalization.html_normalizer import normalize_html
from src.normalization.signature_segmenter import separate_signature
from src.presentation.controller import PresentationController
from src.processing.metrics import (
    record_classification,
    record_forward_style,
    record_html_normalized,
    timed_stage,
)
from src.rendering.inline_renderer import render_block

logger = logging.getLogger(__name__)


def _check_args(content: Optional[str], max_url_length: int) -> str:
    if max_url_length < 2:
        raise ValueError(f"max_url_length must be at least 2, got {max_url_length}")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise TypeError(f"content must be a string, got {type(content).__name__}")
    return content


@lru_cache(maxsize=RENDER_CACHE_SIZE)
def _process(content: str, max_url_length: int) -> ProcessedMessage:
    start_time = time.monotonic()
    raw = RawBody(content)

    # ==================================================================
    # Stage 1-2: Classify, normalize HTML if needed
    # ==================================================================
    if raw.is_html:
        with timed_stage("html_normalizer"):
            text = normalize_html(content)
        record_html_normalized()
    else:
        text = content.replace("\r\n", "\n").replace("\r", "\n")

    if not text.strip():
        record_classification("empty")
        return ProcessedMessage(
            raw=raw,
            normalized="",
            separated=SeparatedContent(main_body=""),
            max_url_length=max_url_length,
        )

    # ==================================================================
    # Stage 3: Forward splitting
    # ==================================================================
    with timed_stage("forward_splitter"):
        forward = split_forward(text)

    if forward is not None:
        record_forward_style(forward.style)
        with timed_stage("inline_renderer"):
            message = ProcessedMessage(
                raw=raw,
                normalized=text,
                forward=forward,
                main_lines=render_block(forward.user_message, max_url_length),
                quoted_lines=render_block(forward.quoted_message, max_url_length),
                max_url_length=max_url_length,
            )
    else:
        # ==============================================================
        # Stage 4: Signature segmentation
        # ==============================================================
        with timed_stage("signature_segmenter"):
            separated = separate_signature(text)

        signature_lines: Tuple[RenderLine, ...] = ()
        with timed_stage("inline_renderer"):
            main_lines = render_block(separated.main_body, max_url_length)
            if separated.signature is not None:
                signature_lines = render_block(separated.signature, max_url_length)

        message = ProcessedMessage(
            raw=raw,
            normalized=text,
            separated=separated,
            main_lines=main_lines,
            signature_lines=signature_lines,
            max_url_length=max_url_length,
        )

    record_classification(message.classification)
    logger.debug(
        "Processed body in %.2f ms: classification=%s, html=%s, preview=%r",
        (time.monotonic() - start_time) * 1000,
        message.classification,
        raw.is_html,
        content[:MAX_BODY_LOG_CHARS],
    )
    return message


def process_message(
    content: Optional[str],
    max_url_length: int = MAX_URL_DISPLAY_LENGTH,
) -> ProcessedMessage:
    """
    Run the full classification + rendering pipeline on one body.

    Results are memoized; repeated calls with the same arguments return the
    same (immutable) ProcessedMessage.

    Args:
        content: Raw stored message body. None is treated as empty.
        max_url_length: Display budget for bare URLs.

    Returns:
        ProcessedMessage.

    Raises:
        TypeError: content is neither a string nor None.
        ValueError: max_url_length is below 2.
    """
    return _process(_check_args(content, max_url_length), max_url_length)


def render_message(
    content: Optional[str],
    show_source_toggle: Optional[bool] = None,
    max_url_length: int = MAX_URL_DISPLAY_LENGTH,
) -> PresentationController:
    """
    Host-facing entry point: a fresh controller for one rendered instance.

    Args:
        content: Raw stored message body.
        show_source_toggle: Whether to offer the raw-source escape hatch.
                            Defaults to SHOW_SOURCE_TOGGLE_DEFAULT.
        max_url_length: Display budget for bare URLs.
    """
    if show_source_toggle is None:
        show_source_toggle = SHOW_SOURCE_TOGGLE_DEFAULT
    return PresentationController(
        process_message(content, max_url_length),
        show_source_toggle=show_source_toggle,
    )


def render_markdown(
    content: Optional[str],
    max_url_length: int = MAX_URL_DISPLAY_LENGTH,
) -> tuple:
    """
    Render in-app authored text (comments, notes) without email heuristics.

    Only the Inline Renderer runs: no HTML, forward or signature handling.
    """
    return render_block(_check_args(content, max_url_length), max_url_length)


def clear_cache() -> None:
    """Drop every memoized ProcessedMessage."""
    _process.cache_clear()


def cache_info():
    return _process.cache_info()
