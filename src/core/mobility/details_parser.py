"""
Event Details Tokenizer

Controller events carry a free-text `details` field made of `Key[Value]`
tokens, e.g. "Signal[-67] Band[5GHz] Channel[36] Cause[Roam]". All parsing of
that field lives here; callers receive an already-typed attribute record.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

TOKEN_PATTERN = re.compile(r'(\w+)\[([^\]]+)\]')
LEADING_INT_PATTERN = re.compile(r'^\s*([+-]?\d+)')

# First present key wins
RSSI_KEYS = ('Signal', 'RSS', 'RSSI')
AUTH_KEYS = ('Auth', 'AuthMethod')


def parse_leading_int(text: Optional[str]) -> Optional[int]:
    """Integer prefix of `text` ("-67dBm" -> -67), or None when there is none."""
    if text is None:
        return None
    match = LEADING_INT_PATTERN.match(text)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class EventAttributes:
    """Typed view of a parsed details string. Absent keys stay None."""
    rssi: Optional[int] = None
    cause: Optional[str] = None
    reason: Optional[str] = None
    code: Optional[str] = None
    status_code: Optional[str] = None
    channel: Optional[str] = None
    band: Optional[str] = None
    auth_method: Optional[str] = None
    raw: Dict[str, str] = field(default_factory=dict)


class DetailsTokenizer:
    def tokenize(self, details: Optional[str]) -> Dict[str, str]:
        """
        Collect every Key[Value] token into a dict.
        Text outside tokens is ignored; a repeated key keeps its last value.
        """
        if not details:
            return {}
        return {key: value for key, value in TOKEN_PATTERN.findall(details)}

    def parse(self, details: Optional[str]) -> EventAttributes:
        tokens = self.tokenize(details)
        return EventAttributes(
            rssi=parse_leading_int(self._first(tokens, RSSI_KEYS)),
            cause=tokens.get('Cause'),
            reason=tokens.get('Reason'),
            code=tokens.get('Code'),
            status_code=tokens.get('Status'),
            channel=tokens.get('Channel'),
            band=tokens.get('Band'),
            auth_method=self._first(tokens, AUTH_KEYS),
            raw=tokens,
        )

    @staticmethod
    def _first(tokens: Dict[str, str], keys) -> Optional[str]:
        for key in keys:
            if tokens.get(key):
                return tokens[key]
        return None
