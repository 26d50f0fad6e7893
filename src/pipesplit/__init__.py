"""pipesplit - split shell command lines into pipelines, jobs and redirections."""

from pipesplit.pipeline import Job, ParseError, Pipeline, Redirection, parse_candidate, parse_pipeline
from pipesplit.statements import parse, split_statements

__version__ = "0.1.0"

__all__ = [
    "Job",
    "ParseError",
    "Pipeline",
    "Redirection",
    "parse",
    "parse_candidate",
    "parse_pipeline",
    "split_statements",
]
