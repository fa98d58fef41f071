"""
ForwardInfo and SeparatedContent — the two mutually exclusive body splits.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ForwardInfo:
    """A body split at a forwarding marker into preface and quoted block."""

    user_message: str
    quoted_message: str
    quoted_from: Optional[str] = None
    quoted_subject: Optional[str] = None
    quoted_date: Optional[str] = None
    style: str = "generic"          # "gmail" | "apple_mail" | "outlook" | "generic"

    @property
    def headers(self) -> dict:
        """Extracted quoted headers, omitting the ones that were not found."""
        found = {
            "from": self.quoted_from,
            "subject": self.quoted_subject,
            "date": self.quoted_date,
        }
        return {k: v for k, v in found.items() if v}


@dataclass(frozen=True)
class SeparatedContent:
    """A non-forwarded body split into main body and optional signature."""

    main_body: str
    signature: Optional[str] = None

    @property
    def has_signature(self) -> bool:
        return self.signature is not None
