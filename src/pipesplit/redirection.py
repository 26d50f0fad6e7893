"""Parse the trailing ``<``, ``>`` and ``>>`` redirections of a pipeline."""

from dataclasses import dataclass
from enum import Enum, auto

from pipesplit.tokenizer import REDIRECT_IN, REDIRECT_OUT

MISSING_STDOUT = "missing standard output file argument after '>'"
MISSING_STDIN = "missing standard input file argument after '<'"

# Skipped before a filename starts, end it afterwards
_FILENAME_BREAKS = (" ", "\t", "|")


class ParseError(ValueError):
    """A candidate could not be turned into a pipeline."""


@dataclass
class Redirection:
    """Standard input or output bound to a file (raw, unexpanded path)."""

    file: str
    append: bool = False


class RedirectMode(Enum):
    EXPECT_OUTPUT_FILE = auto()
    EXPECT_OUTPUT_FILE_APPEND = auto()
    EXPECT_INPUT_FILE = auto()


def parse_redirections(
    text: str, pos: int, mode: RedirectMode
) -> tuple[Redirection | None, Redirection | None]:
    """Read redirection targets from text[pos:] to the end of the candidate.

    ``pos`` is the index just past the ``>`` or ``<`` that started the
    redirection. Input and output may come in either order. Returns
    (stdin, stdout).

    A redirection of a kind that is already captured stops parsing without
    an error; what was captured so far is kept. Raises ParseError when a
    redirection has no filename.
    """
    stdin: Redirection | None = None
    stdout: Redirection | None = None

    while True:
        match mode:
            case RedirectMode.EXPECT_OUTPUT_FILE | RedirectMode.EXPECT_OUTPUT_FILE_APPEND:
                if pos >= len(text):
                    raise ParseError(MISSING_STDOUT)
                if text[pos] == REDIRECT_OUT:
                    mode = RedirectMode.EXPECT_OUTPUT_FILE_APPEND
                    pos += 1

                name, pos, switched = _read_filename(text, pos, other=REDIRECT_IN)
                if not name:
                    raise ParseError(MISSING_STDOUT)
                stdout = Redirection(
                    file=name,
                    append=mode is RedirectMode.EXPECT_OUTPUT_FILE_APPEND,
                )
                if not switched or stdin is not None:
                    return stdin, stdout
                mode = RedirectMode.EXPECT_INPUT_FILE

            case RedirectMode.EXPECT_INPUT_FILE:
                name, pos, switched = _read_filename(text, pos, other=REDIRECT_OUT)
                if not name:
                    raise ParseError(MISSING_STDIN)
                stdin = Redirection(file=name)
                if not switched or stdout is not None:
                    return stdin, stdout
                mode = RedirectMode.EXPECT_OUTPUT_FILE


def _read_filename(text: str, pos: int, other: str) -> tuple[str, int, bool]:
    """Collect one filename starting at text[pos].

    Backslash escapes are honoured (and kept); quotes are not. Once the name
    is complete, everything up to the ``other`` redirection character is
    ignored.

    Returns (name, position after the scan, whether ``other`` was reached).
    """
    chars: list[str] = []
    escaped = False
    complete = False

    while pos < len(text):
        ch = text[pos]
        pos += 1

        if complete:
            if ch == other:
                return "".join(chars), pos, True
            continue

        if escaped:
            chars.append(ch)
            escaped = False
        elif ch == "\\":
            chars.append(ch)
            escaped = True
        elif ch in _FILENAME_BREAKS:
            if chars:
                complete = True
        elif ch == other:
            return "".join(chars), pos, True
        else:
            chars.append(ch)

    return "".join(chars), pos, False
