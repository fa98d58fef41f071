"""
URL display truncation for bare links.

Short URLs are shown verbatim. Long ones keep the host and roughly half of
the remaining budget from each end of the path, joined by an ellipsis. The
result is never longer than max_length; the link title keeps the full URL.
"""
import logging
from urllib.parse import urlsplit

from src.config.constants import ELLIPSIS, HOST_TRUNCATION_MARGIN
from src.config.settings import MAX_URL_DISPLAY_LENGTH

logger = logging.getLogger(__name__)


def _truncate_tail(text: str, max_length: int) -> str:
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def truncate_url(url: str, max_length: int = MAX_URL_DISPLAY_LENGTH) -> str:
    """
    Shorten a URL for display.

    Args:
        url: The raw URL.
        max_length: Display budget in characters (must be > 1).

    Returns:
        Display text of at most max_length characters.
    """
    if max_length <= len(ELLIPSIS):
        raise ValueError(f"max_length must be greater than {len(ELLIPSIS)}, got {max_length}")
    if len(url) <= max_length:
        return url

    try:
        parts = urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"not an absolute URL: {url[:max_length]!r}")
    except ValueError as e:
        logger.warning("URL parse failed, using plain truncation: %s", e)
        return _truncate_tail(url, max_length)

    host = parts.netloc
    if len(host) >= max_length - HOST_TRUNCATION_MARGIN:
        return _truncate_tail(url, max_length)

    # skip "scheme://" so a host like "h" is not found inside the scheme
    host_start = url.index(host, len(parts.scheme) + 3)
    path = url[host_start + len(host):]
    if len(host) + len(path) <= max_length:
        return host + path

    budget = max_length - len(host) - len(ELLIPSIS)
    head = budget // 2
    tail = budget - head
    return host + path[:head] + ELLIPSIS + (path[-tail:] if tail else "")
