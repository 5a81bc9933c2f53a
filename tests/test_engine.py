from contentlint.checks import Check
from contentlint.config import CheckConfig
from contentlint.engine import CheckEngine, run
from contentlint.findings import Outcome


def _titles(file_outcome):
    return [(f.title, f.line) for f in file_outcome.findings]


def test_clean_file_is_ok(tmp_path, write):
    write(tmp_path, "ok.txt", b"hello\nworld\n")
    result = run(["ok.txt"], CheckConfig(), root=tmp_path)
    assert result.outcome is Outcome.OK
    assert result.ok
    assert result.findings == []


def test_invalid_encoding_skips_all_other_checks(tmp_path, write):
    write(tmp_path, "bad.txt", b"\xff trailing \r\n\n\n")
    result = run(["bad.txt"], CheckConfig(), root=tmp_path)
    (file_outcome,) = result.files
    assert _titles(file_outcome) == [("utf8/invalid-encoding", None)]
    assert file_outcome.outcome is Outcome.ERROR


def test_invalid_encoding_without_utf8_check_is_skipped(tmp_path, write):
    write(tmp_path, "bad.txt", b"\xff trailing \n\n")
    result = run(["bad.txt"], CheckConfig(check_utf8=False), root=tmp_path)
    (file_outcome,) = result.files
    assert file_outcome.skipped
    assert file_outcome.findings == ()
    assert result.ok


def test_carriage_return_does_not_stop_optional_checks(tmp_path, write):
    write(tmp_path, "crlf.txt", b"a\r\nb")
    result = run(["crlf.txt"], CheckConfig(), root=tmp_path)
    assert _titles(result.files[0]) == [
        ("unix-line-endings/carriage-return", 1),
        ("single-trailing-newline/missing", 2),
        ("trailing-whitespace/trailing-whitespace", 1),
    ]


def test_line_ending_check_cannot_be_disabled(tmp_path, write):
    write(tmp_path, "crlf.txt", b"a\r\nb")
    config = CheckConfig(check_single_trailing_newline=False, check_trailing_whitespace=False)
    result = run(["crlf.txt"], config, root=tmp_path)
    assert _titles(result.files[0]) == [("unix-line-endings/carriage-return", 1)]


def test_unreadable_file_is_reported_and_run_continues(tmp_path, write):
    write(tmp_path, "ok.txt", b"fine\n")
    result = run(["missing.txt", "ok.txt"], CheckConfig(), root=tmp_path)
    assert [f.path for f in result.files] == ["missing.txt", "ok.txt"]
    assert _titles(result.files[0]) == [("io/unreadable", None)]
    assert result.files[1].outcome is Outcome.OK
    assert result.outcome is Outcome.ERROR


def test_run_outcome_is_error_if_any_file_fails(tmp_path, write):
    write(tmp_path, "a.txt", b"a\n")
    write(tmp_path, "b.txt", b"b \n")
    result = run(["a.txt", "b.txt"], CheckConfig(), root=tmp_path)
    assert [f.outcome for f in result.files] == [Outcome.OK, Outcome.ERROR]
    assert [f.path for f in result.failed_files()] == ["b.txt"]
    assert not result.ok


def test_empty_path_set_is_ok():
    assert run([], CheckConfig()).outcome is Outcome.OK


def test_runs_are_idempotent(tmp_path, write):
    write(tmp_path, "a.txt", b"x \r\ny\n\n")
    write(tmp_path, "b.txt", b"\xc0\xaf")
    engine = CheckEngine(CheckConfig(), root=tmp_path)
    assert engine.run(["a.txt", "b.txt"]) == engine.run(["a.txt", "b.txt"])


def test_parallel_run_keeps_path_order(tmp_path, write):
    paths = []
    for i in range(20):
        name = f"f{i:02d}.txt"
        write(tmp_path, name, b"x \n" if i % 3 else b"x\n")
        paths.append(name)
    paths.reverse()

    serial = run(paths, CheckConfig(jobs=1), root=tmp_path)
    parallel = run(paths, CheckConfig(jobs=4), root=tmp_path)
    assert [f.path for f in parallel.files] == paths
    assert parallel == serial


def test_absolute_paths_ignore_root(tmp_path, write):
    path = write(tmp_path, "abs.txt", b"abs")
    result = run([str(path)], CheckConfig(), root=tmp_path / "elsewhere")
    assert _titles(result.files[0]) == [("single-trailing-newline/missing", 1)]


def test_custom_check_set(tmp_path, write):
    class AlwaysFails(Check):
        rule = "always"

        def check(self, content):
            return [self.finding(content, "fails", "always fails", 1)]

    write(tmp_path, "a.txt", b"a\n")
    engine = CheckEngine(CheckConfig(), checks=[AlwaysFails()], root=tmp_path)
    assert _titles(engine.run(["a.txt"]).files[0]) == [("always/fails", 1)]
