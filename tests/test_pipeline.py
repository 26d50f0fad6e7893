"""Tests for the pipeline module."""

import pytest

from pipesplit.pipeline import Job, Pipeline, Redirection, parse_candidate, parse_pipeline


def args_of(candidate: str) -> list[list[str]]:
    return [job.args for job in parse_pipeline(candidate).jobs]


class TestArguments:
    def test_single_job_no_args(self):
        pipeline = parse_pipeline("cat")
        assert len(pipeline.jobs) == 1
        assert pipeline.jobs[0].command == "cat"
        assert pipeline.jobs[0].args == ["cat"]

    def test_job_with_args(self):
        assert args_of("ls -al dir") == [["ls", "-al", "dir"]]

    def test_single_character_arguments(self):
        assert args_of("echo a b c") == [["echo", "a", "b", "c"]]

    def test_multiple_whitespace_between_words(self):
        assert args_of("ls \t -al\t\tdir") == args_of("ls -al dir")

    def test_leading_whitespace(self):
        assert args_of("    \techo") == [["echo"]]

    def test_trailing_whitespace(self):
        assert args_of("ls -al\t ") == [["ls", "-al"]]

    def test_preserves_paths_and_flags(self):
        assert args_of("cmd --flag=value /usr/local/bin") == [
            ["cmd", "--flag=value", "/usr/local/bin"]
        ]

    @pytest.mark.parametrize("candidate", ["", "  \t ", "\n\n\n"])
    def test_blank_candidate(self, candidate):
        assert parse_pipeline(candidate) is None


class TestQuoting:
    def test_double_quoting(self):
        assert args_of('echo "Hello World" "From Rust"') == [
            ["echo", '"Hello World"', '"From Rust"']
        ]

    def test_double_quoting_contains_single(self):
        assert args_of("echo \"Hello 'Rusty' World\"") == [
            ["echo", "\"Hello 'Rusty' World\""]
        ]

    def test_multi_double_quotes(self):
        assert args_of('echo "Hello "Rusty" World"') == [["echo", '"Hello "Rusty" World"']]

    def test_multi_single_quotes(self):
        assert args_of("echo 'Hello 'Rusty' World'") == [["echo", "'Hello 'Rusty' World'"]]

    def test_single_quoting(self):
        assert args_of("echo '#!!;\"\\'")[0][1] == "'#!!;\"\\'"

    def test_mixed_quoted_and_unquoted(self):
        assert args_of("echo 123 456 \"ABC 'DEF' GHI\" 789 one'  'two") == [
            ["echo", "123", "456", "\"ABC 'DEF' GHI\"", "789", "one'  'two"]
        ]

    def test_escaped_space_stays_in_argument(self):
        assert args_of("echo hello\\ world") == [["echo", "hello\\ world"]]

    def test_unterminated_quote_swallows_rest(self):
        assert args_of("echo 'a b | c") == [["echo", "'a b | c"]]

    def test_operators_inside_quotes(self):
        pipeline = parse_pipeline('echo "a | b & c > d < e"')
        assert pipeline.jobs == [Job(args=["echo", '"a | b & c > d < e"'])]
        assert pipeline.stdin is None
        assert pipeline.stdout is None

    def test_escaped_operators(self):
        assert args_of("echo a\\|b \\&") == [["echo", "a\\|b", "\\&"]]


class TestSubstitution:
    def test_process(self):
        assert args_of("let A = $(seq 1 10)") == [["let", "A", "=", "$(seq 1 10)"]]

    def test_quoted_process(self):
        assert args_of('let A = "$(seq 1 10)"') == [["let", "A", "=", '"$(seq 1 10)"']]

    def test_pipe_inside_substitution(self):
        assert args_of("echo $(ls | wc -l)") == [["echo", "$(ls | wc -l)"]]

    def test_plain_variable(self):
        assert args_of("echo $HOME $PATH") == [["echo", "$HOME", "$PATH"]]

    def test_nested_parens_close_early(self):
        assert args_of("echo $(a (b) c)") == [["echo", "$(a (b)", "c)"]]


class TestPipes:
    def test_two_jobs(self):
        assert args_of("ls | grep foo") == [["ls"], ["grep", "foo"]]

    def test_three_jobs(self):
        assert args_of("a | b | c") == [["a"], ["b"], ["c"]]

    def test_pipe_adjacent_to_words(self):
        assert args_of("ls|grep foo") == [["ls"], ["grep", "foo"]]

    def test_pipe_jobs_not_background(self):
        pipeline = parse_pipeline("ls | wc -l")
        assert [job.background for job in pipeline.jobs] == [False, False]

    def test_empty_jobs_are_skipped(self):
        assert args_of("| cat") == [["cat"]]
        assert args_of("a || b") == [["a"], ["b"]]

    def test_lone_pipe_is_kept_verbatim(self):
        assert args_of("|") == [["|"]]


class TestBackground:
    def test_not_background_job(self):
        assert parse_pipeline("echo hello world").jobs[0].background is False

    def test_background_job(self):
        assert parse_pipeline("echo hello world&").jobs[0].background is True

    def test_background_job_with_space(self):
        pipeline = parse_pipeline("echo hello world &")
        assert pipeline.jobs == [Job(args=["echo", "hello", "world"], background=True)]

    def test_background_ends_statement(self):
        pipeline = parse_pipeline("sleep 1 & echo hi")
        assert pipeline.jobs == [Job(args=["sleep", "1"], background=True)]

    def test_background_after_pipe(self):
        pipeline = parse_pipeline("yes | head &")
        assert pipeline.jobs == [Job(args=["yes"]), Job(args=["head"], background=True)]

    def test_redirection_after_background_ignored(self):
        pipeline = parse_pipeline("cmd & > out")
        assert pipeline.stdout is None


class TestParseCandidate:
    def test_appends_pipeline(self):
        pipelines: list[Pipeline] = []
        assert parse_candidate(pipelines, "ls -al") is None
        assert pipelines == [Pipeline(jobs=[Job(args=["ls", "-al"])])]

    def test_blank_appends_nothing(self):
        pipelines: list[Pipeline] = []
        assert parse_candidate(pipelines, "  \t ") is None
        assert pipelines == []

    def test_error_appends_nothing(self):
        pipelines: list[Pipeline] = []
        error = parse_candidate(pipelines, "cmd >")
        assert error == "missing standard output file argument after '>'"
        assert pipelines == []

    def test_error_leaves_earlier_pipelines(self):
        pipelines: list[Pipeline] = []
        parse_candidate(pipelines, "echo one")
        assert parse_candidate(pipelines, "cat <") is not None
        parse_candidate(pipelines, "echo two")
        assert [p.jobs[0].args for p in pipelines] == [["echo", "one"], ["echo", "two"]]

    def test_redirections_are_attached(self):
        pipelines: list[Pipeline] = []
        parse_candidate(pipelines, "sort < in.txt >> out.txt")
        assert pipelines[0].stdin == Redirection(file="in.txt")
        assert pipelines[0].stdout == Redirection(file="out.txt", append=True)


class TestDataclasses:
    def test_job_defaults(self):
        job = Job(args=["ls"])
        assert job.background is False
        assert job.command == "ls"

    def test_pipeline_defaults(self):
        pipeline = Pipeline()
        assert pipeline.jobs == []
        assert pipeline.stdin is None
        assert pipeline.stdout is None

    def test_equality(self):
        a = Pipeline(jobs=[Job(args=["ls"])], stdout=Redirection(file="f.txt"))
        b = Pipeline(jobs=[Job(args=["ls"])], stdout=Redirection(file="f.txt"))
        assert a == b
