"""Quote, escape and command-substitution tracking shared by every scan pass."""

from dataclasses import dataclass

BLANKS = (" ", "\t")


@dataclass
class ScanState:
    """Per-candidate scan state.

    Feed characters left to right through ``advance``. A character is
    *guarded* when it arrives while an escape, a quote or a ``$(`` span is
    open, or when it is itself consumed as a state transition (backslash,
    quote, ``$``, ``(``, ``)``). Guarded characters are always argument
    content; only unguarded characters may act as token separators.

    Only one level of ``$(`` is tracked: the first unguarded ``)`` closes
    the span, whatever parentheses came in between.
    """

    escaped: bool = False
    single_quoted: bool = False
    double_quoted: bool = False
    substitution_open: bool = False
    substitution_paren: bool = False
    in_whitespace: bool = False

    @property
    def guarded(self) -> bool:
        """True when a literal blank at the current position is not a separator."""
        return (
            self.escaped
            or self.single_quoted
            or self.double_quoted
            or self.substitution_paren
        )

    def advance(self, ch: str) -> bool:
        """Consume one character and return whether it was guarded."""
        if self.escaped:
            self.escaped = False
            self.in_whitespace = False
            return True

        if self.substitution_open and ch != "(":
            # "$" not followed by "(" is just a dollar sign
            self.substitution_open = False

        was_guarded = self.guarded
        guarded = self._transition(ch) or was_guarded
        self.in_whitespace = not guarded and ch in BLANKS
        return guarded

    def _transition(self, ch: str) -> bool:
        """Apply the transition table for ``ch``. Returns True if it matched."""
        match ch:
            case "\\":
                self.escaped = True
            case "'" if not (self.double_quoted or self.substitution_paren):
                self.single_quoted = not self.single_quoted
            case '"' if not (self.single_quoted or self.substitution_paren):
                self.double_quoted = not self.double_quoted
            case "$" if not (self._quoted or self._in_substitution):
                self.substitution_open = True
            case "(" if self.substitution_open:
                self.substitution_open = False
                self.substitution_paren = True
            case ")" if self.substitution_paren:
                self.substitution_paren = False
            case _:
                return False
        return True

    @property
    def _quoted(self) -> bool:
        return self.single_quoted or self.double_quoted

    @property
    def _in_substitution(self) -> bool:
        return self.substitution_open or self.substitution_paren
