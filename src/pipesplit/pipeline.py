"""Split a statement candidate into jobs, pipes, background markers and redirections."""

from dataclasses import dataclass, field

from pipesplit.redirection import ParseError, RedirectMode, Redirection, parse_redirections
from pipesplit.scanner import ScanState
from pipesplit.tokenizer import REDIRECT_OUT, trim_candidate

__all__ = [
    "Job",
    "ParseError",
    "Pipeline",
    "Redirection",
    "parse_candidate",
    "parse_pipeline",
]


@dataclass
class Job:
    """A single command invocation. ``args[0]`` is the program name."""

    args: list[str]
    background: bool = False

    @property
    def command(self) -> str:
        return self.args[0]


@dataclass
class Pipeline:
    """Jobs connected by pipes, sharing one optional stdin and stdout."""

    jobs: list[Job] = field(default_factory=list)
    stdin: Redirection | None = None
    stdout: Redirection | None = None


def parse_pipeline(candidate: str) -> Pipeline | None:
    """Parse one statement candidate.

    Returns None for blank candidates. Argument text is kept exactly as
    written: quotes and backslashes stay, only separating blanks go.

    Example: 'cat < in | sort > out' ->
        Pipeline(jobs=[Job(['cat']), Job(['sort'])],
                 stdin=Redirection('in'), stdout=Redirection('out'))

    Raises ParseError if a redirection is missing its filename.
    """
    text = trim_candidate(candidate)
    if text is None:
        return None

    jobs: list[Job] = []
    args: list[str] = []
    word: list[str] = []
    stdin: Redirection | None = None
    stdout: Redirection | None = None
    redirected = False
    state = ScanState()

    for pos, ch in enumerate(text):
        if state.advance(ch):
            word.append(ch)
            continue

        match ch:
            case " " | "\t":
                _end_word(word, args)
            case "|":
                _end_word(word, args)
                _end_job(args, jobs, background=False)
            case "&":
                # A background marker ends the statement
                _end_word(word, args)
                _end_job(args, jobs, background=True)
                break
            case ">" | "<":
                _end_word(word, args)
                mode = (
                    RedirectMode.EXPECT_OUTPUT_FILE
                    if ch == REDIRECT_OUT
                    else RedirectMode.EXPECT_INPUT_FILE
                )
                stdin, stdout = parse_redirections(text, pos + 1, mode)
                redirected = True
                break
            case _:
                word.append(ch)

    _end_word(word, args)
    _end_job(args, jobs, background=False)

    if not jobs and not redirected:
        jobs.append(Job(args=[text]))

    return Pipeline(jobs=jobs, stdin=stdin, stdout=stdout)


def parse_candidate(pipelines: list[Pipeline], candidate: str) -> str | None:
    """Parse a candidate and append the resulting pipeline to ``pipelines``.

    Returns the error message if parsing failed, in which case nothing is
    appended. Pipelines already in the list are left alone either way.
    """
    try:
        pipeline = parse_pipeline(candidate)
    except ParseError as e:
        return str(e)

    if pipeline is not None:
        pipelines.append(pipeline)
    return None


def _end_word(word: list[str], args: list[str]) -> None:
    if word:
        args.append("".join(word))
        word.clear()


def _end_job(args: list[str], jobs: list[Job], background: bool) -> None:
    if args:
        jobs.append(Job(args=args.copy(), background=background))
        args.clear()
