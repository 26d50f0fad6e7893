"""Token characters and the leading-whitespace trimmer for statement candidates."""

from pipesplit.scanner import ScanState

REDIRECT_OUT = ">"
REDIRECT_IN = "<"

# Characters that never make a candidate worth parsing on their own
_INSIGNIFICANT = " \t\r\n"


def trim_candidate(candidate: str) -> str | None:
    """Drop the leading run of blanks from a candidate.

    Returns the remainder, or None when nothing but spaces, tabs, carriage
    returns and newlines is left. Nothing is ever skipped once a
    non-blank character has been seen, and quotes are left in place.

    Example: '   \\techo hi' -> 'echo hi'
    """
    state = ScanState()
    start = 0
    for ch in candidate:
        state.advance(ch)
        if not state.in_whitespace:
            break
        start += 1

    trimmed = candidate[start:]
    if not trimmed.strip(_INSIGNIFICANT):
        return None
    return trimmed
