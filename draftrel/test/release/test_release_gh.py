from __future__ import annotations

from pathlib import Path

import pytest

from draftrel.core.result import Err, Ok
from draftrel.platform.process import ProcessError
from draftrel.release import gh as gh_mod

SHA = "0123456789abcdef0123456789abcdef01234567"


def _err(*, stderr: str, returncode: int = 1) -> Err[ProcessError]:
    return Err(
        ProcessError(
            command=("gh", "pr", "list"),
            returncode=returncode,
            stdout="",
            stderr=stderr,
        )
    )


def _no_sleep(seconds: float) -> None:
    del seconds


def _install(monkeypatch: pytest.MonkeyPatch, responses: dict[str, object]) -> list[list[str]]:
    """Answer gh calls by their first three argv items, e.g. "gh pr list"."""
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], cwd: Path, env=None, *, timeout: float):
        del cwd, env, timeout
        calls.append(cmd)
        key = " ".join(cmd[:3])
        answer = responses[key]
        if isinstance(answer, list):
            return answer.pop(0)
        return answer

    monkeypatch.setattr(gh_mod, "run_process", fake_run)
    monkeypatch.setattr(gh_mod, "sleep", _no_sleep)
    return calls


def test_find_pr_number_from_search(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _install(monkeypatch, {"gh pr list": Ok('[{"number": 42}]')})
    host = gh_mod.GhCodeHost(repo_root=tmp_path)

    assert host.find_pr_number(SHA) == 42
    assert calls[0][:5] == ["gh", "pr", "list", "--search", SHA]
    assert "merged" in calls[0]


def test_find_pr_number_falls_back_to_view(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _install(
        monkeypatch,
        {"gh pr list": Ok("[]"), "gh pr view": Ok('{"number": 7}')},
    )
    host = gh_mod.GhCodeHost(repo_root=tmp_path)

    assert host.find_pr_number(SHA) == 7
    assert calls[1][:4] == ["gh", "pr", "view", SHA]


def test_find_pr_number_failures_mean_not_found(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    _install(
        monkeypatch,
        {
            "gh pr list": _err(stderr="HTTP 404 Not Found"),
            "gh pr view": _err(stderr="no pull requests found"),
        },
    )
    host = gh_mod.GhCodeHost(repo_root=tmp_path)
    assert host.find_pr_number(SHA) is None


def test_find_pr_number_timeout_means_not_found(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    timed_out = _err(stderr="Command timed out after 1.0s", returncode=-1)
    calls = _install(monkeypatch, {"gh pr list": timed_out, "gh pr view": timed_out})
    host = gh_mod.GhCodeHost(repo_root=tmp_path, timeout=1.0, retry_attempts=2)

    assert host.find_pr_number(SHA) is None
    assert [" ".join(c[:3]) for c in calls] == ["gh pr list", "gh pr view"]


def test_read_retries_transient_error(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _install(
        monkeypatch,
        {"gh pr list": [_err(stderr="HTTP 503 Service Unavailable"), Ok('[{"number": 3}]')]},
    )
    host = gh_mod.GhCodeHost(repo_root=tmp_path)

    assert host.find_pr_number(SHA) == 3
    assert len(calls) == 2


def test_read_does_not_retry_local_timeout(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    timed_out = _err(stderr="Command timed out after 60.0s", returncode=-1)
    calls = _install(monkeypatch, {"gh pr list": [timed_out]})

    result = gh_mod.run_gh_read(
        repo_root=tmp_path, cmd=["gh", "pr", "list"], timeout=60.0, retry_attempts=3
    )

    assert result == timed_out
    assert len(calls) == 1


def test_read_retries_connection_reset(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    reset = _err(stderr="read tcp: connection reset by peer")
    calls = _install(monkeypatch, {"gh pr list": [reset, reset, Ok("[]")]})

    result = gh_mod.run_gh_read(
        repo_root=tmp_path, cmd=["gh", "pr", "list"], timeout=60.0, retry_attempts=3
    )

    assert result == Ok("[]")
    assert len(calls) == 3


def test_invalid_json_means_not_found(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _install(monkeypatch, {"gh pr list": Ok("not json"), "gh pr view": Ok("{}")})
    host = gh_mod.GhCodeHost(repo_root=tmp_path)
    assert host.find_pr_number(SHA) is None


def test_pr_author_login(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _install(monkeypatch, {"gh pr view": Ok('{"author": {"login": "octocat"}}')})
    host = gh_mod.GhCodeHost(repo_root=tmp_path)
    assert host.pr_author_login(42) == "octocat"


def test_pr_author_login_missing(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _install(monkeypatch, {"gh pr view": Ok('{"author": null}')})
    host = gh_mod.GhCodeHost(repo_root=tmp_path)
    assert host.pr_author_login(42) is None


def test_create_release_builds_draft_command(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    calls = _install(monkeypatch, {"gh release create": Ok("https://example.invalid/r/1")})
    host = gh_mod.GhCodeHost(repo_root=tmp_path)

    result = host.create_release(tag="v1.3.0", title="Release v1.3.0", notes="## x")

    assert result == Ok(None)
    cmd = calls[0]
    assert cmd[:4] == ["gh", "release", "create", "v1.3.0"]
    assert cmd[cmd.index("--title") + 1] == "Release v1.3.0"
    assert cmd[cmd.index("--notes") + 1] == "## x"
    assert "--draft" in cmd


def test_create_release_is_not_retried(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    calls = _install(monkeypatch, {"gh release create": _err(stderr="HTTP 502 Bad Gateway")})
    host = gh_mod.GhCodeHost(repo_root=tmp_path)

    result = host.create_release(tag="v1.3.0", title="Release v1.3.0", notes="")

    assert isinstance(result, Err)
    assert result.error.kind == "release_create_failed"
    assert len(calls) == 1


def test_ensure_gh_available_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(gh_mod.shutil, "which", lambda name: None)
    result = gh_mod.ensure_gh_available()
    assert isinstance(result, Err)
    assert result.error.kind == "gh_missing"


def test_ensure_gh_auth_required(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _install(monkeypatch, {"gh auth status": _err(stderr="not logged in")})
    result = gh_mod.ensure_gh_auth(repo_root=tmp_path)
    assert isinstance(result, Err)
    assert result.error.kind == "gh_auth_required"
