"""
Shared test fixtures for the message pipeline test suite.
"""
import pytest

from src.models.mention import CaretPoint, TeamMember
from src.processing.pipeline import clear_cache


@pytest.fixture(autouse=True)
def _fresh_pipeline_cache():
    """Every test starts with an empty memo so metrics see cache misses."""
    clear_cache()
    yield
    clear_cache()


# ==========================================================================
# Forwarded bodies (one per marker style)
# ==========================================================================

FORWARD_MARKER_LINES = {
    "gmail": "---------- Forwarded message ----------",
    "apple_mail": "Begin forwarded message:",
    "outlook": "-------- Original Message --------",
    "generic": "--- Forwarded ---",
}


def forwarded_body(marker: str) -> str:
    return f"Hi,\n\n{marker}\nFrom: a@b.com\nSubject: X\n\nBody text"


@pytest.fixture(params=sorted(FORWARD_MARKER_LINES))
def forward_case(request):
    """(style, body) for each supported forwarding marker."""
    style = request.param
    return style, forwarded_body(FORWARD_MARKER_LINES[style])


# ==========================================================================
# Signature bodies
# ==========================================================================

@pytest.fixture
def personal_signature_body():
    return "Thanks for reaching out.\n\nJohn Smith\nAcme Inc\n555-123-4567"


@pytest.fixture
def marketing_footer_body():
    return (
        "Your ticket #123 has a new reply.\n"
        "\n"
        "[Logo](url)\n"
        "Acme App\n"
        "View in Acme\n"
        "Get the app for iOS"
    )


@pytest.fixture
def all_signature_body():
    return "John Smith\n555-123-4567"


# ==========================================================================
# HTML bodies
# ==========================================================================

@pytest.fixture
def html_body():
    return (
        "<html><head><style>p { color: red; }</style></head><body>"
        "<p>Hello &amp; welcome,</p>"
        "<p>See <a href=\"https://example.com/docs\">the docs</a>.</p>"
        "<p>Chart: <img alt=\"chart\" src=\"https://example.com/chart.png\"></p>"
        "<hr>"
        "<div>Jane Doe<br>+1 415-555-0100</div>"
        "</body></html>"
    )


# ==========================================================================
# Mentions
# ==========================================================================

@pytest.fixture
def team_members():
    return [
        TeamMember(id="u1", email="ada@example.com", first_name="Ada", last_name="Lovelace"),
        TeamMember(id="u2", email="grace@example.com", first_name="Grace", last_name="Hopper"),
        TeamMember(id="u3", email="linus@example.com"),
    ]


class FixedMeasurer:
    """Monospace layout stand-in: 8px per character, 20px per line."""

    def __init__(self, char_width: float = 8.0, line_height: float = 20.0):
        self.char_width = char_width
        self.line_height = line_height
        self.calls = []

    def measure(self, text_before_cursor: str) -> CaretPoint:
        self.calls.append(text_before_cursor)
        lines = text_before_cursor.split("\n")
        return CaretPoint(
            x=len(lines[-1]) * self.char_width,
            y=len(lines) * self.line_height,
        )


@pytest.fixture
def measurer():
    return FixedMeasurer()
