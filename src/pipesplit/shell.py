"""Interactive driver: prompt, read, split into statements, parse, print, repeat."""

import argparse
import contextlib
import os
import readline
import sys

from pipesplit.pipeline import Pipeline, parse_candidate
from pipesplit.statements import split_statements

HISTORY_FILE = os.path.expanduser("~/.pipesplit_history")
HISTORY_LENGTH = 1000
PROG = "pipesplit"


def format_pipeline(pipeline: Pipeline) -> str:
    """Render a pipeline one job or redirection per line."""
    lines = []
    for i, job in enumerate(pipeline.jobs):
        marker = " &" if job.background else ""
        lines.append(f"job {i}: {job.args!r}{marker}")
    if pipeline.stdin is not None:
        lines.append(f"stdin: {pipeline.stdin.file!r}")
    if pipeline.stdout is not None:
        mode = " (append)" if pipeline.stdout.append else ""
        lines.append(f"stdout: {pipeline.stdout.file!r}{mode}")
    return "\n".join(lines)


class Shell:
    """Parser session state and main loop."""

    def __init__(self) -> None:
        self.last_exit_code: int = 0

    def load_history(self) -> None:
        with contextlib.suppress(FileNotFoundError, PermissionError, OSError):
            readline.read_history_file(HISTORY_FILE)

    def save_history(self) -> None:
        with contextlib.suppress(PermissionError, OSError):
            readline.write_history_file(HISTORY_FILE)

    def get_prompt(self) -> str:
        cwd = os.getcwd()
        home = os.path.expanduser("~")
        if cwd == home:
            display = "~"
        elif cwd.startswith(home + "/"):
            display = "~/" + cwd[len(home) + 1 :]
        else:
            display = cwd
        return f"{display} $ "

    def run_command(self, text: str) -> list[Pipeline]:
        """Parse every statement in ``text`` and return the resulting pipelines.

        A statement that fails to parse is reported on stderr and skipped;
        the others are still parsed. ``last_exit_code`` is 2 if any failed.
        """
        pipelines: list[Pipeline] = []
        self.last_exit_code = 0
        for candidate in split_statements(text):
            error = parse_candidate(pipelines, candidate)
            if error is not None:
                print(f"{PROG}: {error}", file=sys.stderr)
                self.last_exit_code = 2
        return pipelines

    def _report(self, pipelines: list[Pipeline]) -> int | None:
        """Print pipelines up to a lone ``exit [code]`` and return its code."""
        for pipeline in pipelines:
            code = _exit_code(pipeline)
            if code is not None:
                return code
            print(format_pipeline(pipeline))
        return None

    def run_source(self, text: str) -> int:
        """Parse a whole script and print its pipelines. Returns the exit status."""
        for pipeline in self.run_command(text):
            print(format_pipeline(pipeline))
        return self.last_exit_code

    def run(self) -> int:
        """Main loop."""
        self.load_history()
        readline.set_history_length(HISTORY_LENGTH)

        exit_code = 0
        while True:
            try:
                line = input(self.get_prompt())
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if not line.strip():
                continue

            code = self._report(self.run_command(line))
            if code is not None:
                exit_code = code
                break

        self.save_history()
        return exit_code


def _exit_code(pipeline: Pipeline) -> int | None:
    """Return the exit code if the pipeline is a lone ``exit [code]``."""
    if len(pipeline.jobs) != 1 or pipeline.jobs[0].command != "exit":
        return None
    args = pipeline.jobs[0].args[1:]
    try:
        return int(args[0]) if args else 0
    except ValueError:
        print(f"exit: {args[0]}: numeric argument required", file=sys.stderr)
        return 2


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Parse shell command lines into pipelines and print them.",
    )
    parser.add_argument("script", nargs="?", help="parse this file instead of prompting")
    parser.add_argument("-c", dest="command", metavar="STRING", help="parse STRING and exit")
    args = parser.parse_args(argv)

    shell = Shell()
    if args.command is not None:
        return shell.run_source(args.command)
    if args.script is not None:
        try:
            with open(args.script) as f:
                text = f.read()
        except FileNotFoundError:
            print(f"{PROG}: {args.script}: No such file or directory", file=sys.stderr)
            return 1
        return shell.run_source(text)
    return shell.run()
