"""Split scripts into statement candidates and parse them."""

from collections.abc import Iterator

from pipesplit.pipeline import ParseError, Pipeline, parse_candidate
from pipesplit.scanner import ScanState

STATEMENT_SEPARATORS = (";", "\n")
COMMENT = "#"


def split_statements(script: str) -> Iterator[str]:
    """Yield the statements of a script, one candidate at a time.

    Statements end at an unquoted, unescaped ';' or newline. A '#' at the
    start of a word begins a comment that runs to the end of the line.
    Quoted newlines stay inside their statement.

    Example: 'cd /tmp; ls  # list' -> 'cd /tmp', ' ls  '
    """
    state = ScanState()
    current: list[str] = []
    at_word_start = True
    in_comment = False

    for ch in script:
        if in_comment:
            if ch != "\n":
                continue
            in_comment = False

        guarded = state.advance(ch)
        if not guarded:
            if ch in STATEMENT_SEPARATORS:
                if current:
                    yield "".join(current)
                    current.clear()
                state = ScanState()
                at_word_start = True
                continue
            if ch == COMMENT and at_word_start:
                in_comment = True
                continue

        current.append(ch)
        at_word_start = state.in_whitespace

    if current:
        yield "".join(current)


def parse(script: str) -> list[Pipeline]:
    """Parse every statement of a script into pipelines.

    Blank statements and comments produce nothing. Raises ParseError with
    the message of the first statement that fails.
    """
    pipelines: list[Pipeline] = []
    for candidate in split_statements(script):
        error = parse_candidate(pipelines, candidate)
        if error is not None:
            raise ParseError(error)
    return pipelines
