import io
import logging
import subprocess

from gerrit_cli.builder import CommandDescriptor, CommandStep, build
from gerrit_cli.commands import OperationKind
from gerrit_cli.executor import NOT_STARTED, Executor
from gerrit_cli.resolver import InitParameters


def _step(*argv):
    return CommandStep(commands=(CommandDescriptor(argv[0], tuple(argv[1:])),))


def _recording_run(calls, returncodes=None):
    returncodes = dict(returncodes or {})

    def fake_run(cmd, cwd=None, **kwargs):
        calls.append((list(cmd), cwd))
        return subprocess.CompletedProcess(
            args=cmd,
            returncode=returncodes.get(cmd[0], 0),
            stdout="out:" + cmd[0],
            stderr="",
        )

    return fake_run


def test_run_echoes_step_before_running(monkeypatch):
    calls = []
    monkeypatch.setattr("gerrit_cli.executor.subprocess.run", _recording_run(calls))
    out = io.StringIO()

    status, output = Executor(out=out).run(_step("git", "commit", "-m", "a b"))

    assert status == 0
    assert output == ""
    assert out.getvalue() == "git commit -m 'a b'\n"
    assert calls == [(["git", "commit", "-m", "a b"], None)]


def test_run_returns_captured_output_and_first_failing_status(monkeypatch):
    calls = []
    monkeypatch.setattr(
        "gerrit_cli.executor.subprocess.run",
        _recording_run(calls, returncodes={"curl": 6}),
    )
    step = CommandStep(
        commands=(
            CommandDescriptor("curl", ("-Lo", "hook", "url")),
            CommandDescriptor("chmod", ("+x", "hook")),
        )
    )

    status, output = Executor(capture=True, out=io.StringIO()).run(step)

    # Both commands run even though curl failed; status is curl's.
    assert [argv[0] for argv, _ in calls] == ["curl", "chmod"]
    assert status == 6
    assert output == "out:curlout:chmod"


def test_dry_run_only_echoes(monkeypatch):
    def fail_run(*args, **kwargs):
        raise AssertionError("subprocess.run must not be called in dry-run mode")

    monkeypatch.setattr("gerrit_cli.executor.subprocess.run", fail_run)
    out = io.StringIO()

    results = Executor(dry_run=True, out=out).run_all(
        [_step("git", "push", "gerrit", "HEAD:refs/for/master")]
    )

    assert results == [(0, "")]
    assert out.getvalue() == "git push gerrit HEAD:refs/for/master\n"


def test_init_sequence_continues_after_failures_and_follows_cd(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(
        "gerrit_cli.executor.subprocess.run",
        _recording_run(calls, returncodes={"git": 128}),
    )
    (tmp_path / "app").mkdir()
    steps = build(OperationKind.INIT, InitParameters(user="jdoe", repo="app"))
    out = io.StringIO()

    results = Executor(cwd=tmp_path, out=out).run_all(steps)

    assert [status for status, _ in results] == [128, 0, 0, 0, 128]
    assert [argv[0] for argv, _ in calls] == ["git", "mkdir", "curl", "chmod", "git"]
    assert calls[0][1] == str(tmp_path)
    assert {cwd for _, cwd in calls[1:]} == {str(tmp_path / "app")}
    assert len(out.getvalue().splitlines()) == 5


def test_failed_cd_keeps_previous_directory(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr("gerrit_cli.executor.subprocess.run", _recording_run(calls))
    executor = Executor(cwd=tmp_path, out=io.StringIO())

    results = executor.run_all([_step("cd", "missing"), _step("mkdir", "-p", ".git/hooks")])

    assert results[0][0] == 1
    assert calls == [(["mkdir", "-p", ".git/hooks"], str(tmp_path))]


def test_missing_program_is_reported_and_sequence_continues(monkeypatch):
    calls = []

    def fake_run(cmd, cwd=None, **kwargs):
        calls.append(cmd[0])
        if cmd[0] == "curl":
            raise FileNotFoundError(2, "No such file or directory", "curl")
        return subprocess.CompletedProcess(args=cmd, returncode=0)

    monkeypatch.setattr("gerrit_cli.executor.subprocess.run", fake_run)

    results = Executor(out=io.StringIO()).run_all(
        [_step("curl", "-Lo", "hook", "url"), _step("git", "status")]
    )

    assert results == [(NOT_STARTED, ""), (0, "")]
    assert calls == ["curl", "git"]


def test_failed_command_inside_step_is_logged(monkeypatch, caplog):
    calls = []
    monkeypatch.setattr(
        "gerrit_cli.executor.subprocess.run",
        _recording_run(calls, returncodes={"curl": 6}),
    )
    step = CommandStep(
        commands=(
            CommandDescriptor("curl", ("-Lo", "hook", "url")),
            CommandDescriptor("chmod", ("+x", "hook")),
        )
    )

    with caplog.at_level(logging.WARNING, logger="gerrit_cli.executor"):
        status, _ = Executor(out=io.StringIO()).run(step)

    assert status == 6
    warnings = [r for r in caplog.records if r.levelno >= logging.WARNING]
    assert len(warnings) == 1
    assert "status 6" in warnings[0].getMessage()
    assert "curl -Lo hook url" in warnings[0].getMessage()
