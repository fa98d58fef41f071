"""
Constants used across the pipeline.
Versioned and pinned so a given body always classifies the same way.
"""
from typing import Dict, List, Set

PIPELINE_VERSION: str = "message-pipeline-1.4.0"

# =============================================================================
# Format classification
# =============================================================================
HTML_TAG_ALLOWLIST: List[str] = [
    "html", "head", "body", "div", "table", "tr", "td",
    "p", "span", "a", "img", "br", "hr",
]

HEADER_FIELD_NAMES: List[str] = [
    "From", "Subject", "To", "Date", "Sent", "Cc", "Reply-To",
]

# =============================================================================
# HTML normalization
# =============================================================================
BLOCK_CLOSING_TAGS: List[str] = [
    "p", "div", "tr", "h1", "h2", "h3", "h4", "h5", "h6", "li", "br", "hr",
]

HR_SEPARATOR: str = "\n---\n"

NAMED_ENTITIES: Dict[str, str] = {
    "nbsp": " ",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "#39": "'",
    "copy": "©",
    "reg": "®",
    "trade": "™",
}

# =============================================================================
# Forward detection (priority order, first match wins)
# =============================================================================
FORWARD_MARKERS: List[tuple] = [
    ("gmail", r"^[ \t>]*-{5,}[ \t]*Forwarded message[ \t]*-{5,}[ \t]*$"),
    ("apple_mail", r"^[ \t>]*Begin forwarded message:[ \t]*$"),
    ("outlook", r"^[ \t>]*-{3,}[ \t]*Original Message[ \t]*-{3,}[ \t]*$"),
    ("generic", r"^[ \t>]*[-—]{3,}[ \t]*Forwarded[ \t]*[-—]{3,}[ \t]*$"),
]

# =============================================================================
# Signature segmentation
# =============================================================================
SIGNATURE_DELIMITERS: List[str] = ["--", "---", "----------"]

DOMAIN_TLDS: List[str] = [
    "com", "net", "org", "io", "co", "ai", "app", "dev", "biz", "info",
    "us", "uk", "de", "fr", "es", "it", "nl", "eu", "ca", "au", "in",
]

SOCIAL_PLATFORMS: List[str] = [
    "linkedin", "twitter", "facebook", "instagram", "youtube",
    "tiktok", "github", "pinterest", "x.com", "threads.net",
]

FOOTER_PATTERNS: List[str] = [
    r"unsubscribe",
    r"^sent from my\b",
    r"^sent from (?:outlook|mail|yahoo mail|gmail)\b",
    r"^get outlook for\b",
    r"\bget the app\b",
    r"\bdownload (?:the|our) app\b",
    r"\bapp store\b",
    r"\bgoogle play\b",
    r"\bfor (?:ios|android)\b",
    r"^(?:view|open) in [\w.-]+",
    r"\bturn off notifications\b",
    r"\bmanage (?:your )?(?:notification|email|subscription)s?(?: settings| preferences)?\b",
    r"(?:©|\(c\)|copyright)\s*\d{4}",
    r"\ball rights reserved\b",
    r"\byou(?:'re| are) receiving this\b",
    r"\bthis (?:e-?mail|message) was sent to\b",
    r"\bprivacy policy\b",
]

MARKETING_FOOTER_PATTERNS: List[str] = [
    r"^(?:view|open) in [\w.-]+",
    r"\bapp store\b",
    r"\bgoogle play\b",
    r"\bget the app\b",
    r"\bdownload (?:the|our) app\b",
    r"\bfor (?:ios|android)\b",
    r"\bturn off notifications\b",
]

GREETING_WORDS: Set[str] = {"hi", "hello", "hey", "dear"}

CLOSING_PHRASES: Set[str] = {
    "thanks", "thank you", "regards", "best", "sincerely",
    "best regards", "kind regards", "warm regards", "many thanks",
    "thanks again", "cheers",
}

SIGNATURE_LOOKBACK: int = 5
MARKETING_LOOKBACK: int = 20
NAME_MAX_WORDS: int = 4
NAME_MAX_CHARS: int = 40
SHORT_FOOTER_LINE_CHARS: int = 30
MIN_SIGNATURE_CHARS: int = 5
NAME_TERMINAL_PUNCTUATION: str = ".!?;:"
SENTENCE_PUNCTUATION: str = ".!?"

# =============================================================================
# Inline rendering
# =============================================================================
IMAGE_EXTENSIONS: List[str] = ["png", "jpg", "jpeg", "gif", "webp", "svg"]
ATTACHMENT_SCHEME: str = "attachment:"
DEFAULT_IMAGE_ALT: str = "Image"
ELLIPSIS: str = "\u2026"
NBSP: str = "\u00a0"
HOST_TRUNCATION_MARGIN: int = 10

# =============================================================================
# Mention autocomplete
# =============================================================================
MENTION_TRIGGER: str = "@"
MAX_MENTION_QUERY: int = 50
MENTION_POPOVER_WIDTH: int = 256
MENTION_POPOVER_GAP: int = 4
