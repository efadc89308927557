"""Parse request and reference strings into integer sequences.

Disk requests and page references are written the way textbooks print
them: a comma-separated list of decimal integers, e.g.
``98,183,37,122,14,124,65,67``.  The grammar is deliberately strict —
no spaces, no trailing comma, no empty list::

    sequence := int ("," int)*
    int      := "-"? digit+

The engines never see text.  Everything that reaches them has already
been through ``parse_sequence``, so a malformed string fails here, before
any simulation starts.
"""

import re

_SEQUENCE_RE = re.compile(r"-?\d+(?:,-?\d+)*")
_INT_RE = re.compile(r"-?\d+")


class ParseError(ValueError):
    """Raised when request/reference text does not match the grammar."""

    def __init__(self, text: str, reason: str) -> None:
        """Record the offending text alongside the reason."""
        self.text = text
        super().__init__(f"{reason}: {text!r}")


def parse_sequence(text: str) -> list[int]:
    """Parse a comma-separated list of integers.

    Args:
        text: Input such as ``"1,2,3,4,1,2,5"``.

    Returns:
        The integers in input order.

    Raises:
        ParseError: If the text is empty or not a comma-separated list
            of decimal integers.

    """
    if _SEQUENCE_RE.fullmatch(text) is None:
        raise ParseError(text, "Expected comma-separated integers")
    return [int(part) for part in text.split(",")]


def parse_int(text: str, *, name: str) -> int:
    """Parse a single integer argument.

    Args:
        text: The raw argument.
        name: What the argument means, for the error message.

    Raises:
        ParseError: If the text is not a decimal integer.

    """
    if _INT_RE.fullmatch(text) is None:
        raise ParseError(text, f"{name} must be an integer")
    return int(text)
