from __future__ import annotations

import pytest

from draftrel.core.errors import ErrorCode
from draftrel.output.console import MockConsole, Style
from draftrel.output.errors import print_release_error, release_error_exit_code
from draftrel.release.errors import ReleaseError


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("invalid_input", ErrorCode.USER_ERROR),
        ("gh_missing", ErrorCode.ENV_ERROR),
        ("gh_auth_required", ErrorCode.ENV_ERROR),
        ("no_tag_found", ErrorCode.ENV_ERROR),
        ("invalid_base_version", ErrorCode.ENV_ERROR),
        ("tag_create_failed", ErrorCode.PUBLISH_ERROR),
        ("tag_push_failed", ErrorCode.PUBLISH_ERROR),
        ("release_create_failed", ErrorCode.PUBLISH_ERROR),
        ("history_unavailable", ErrorCode.NETWORK_ERROR),
    ],
)
def test_exit_codes(kind: str, code: ErrorCode) -> None:
    error = ReleaseError(kind=kind, message="x")  # type: ignore[arg-type]
    assert release_error_exit_code(error) == int(code)
    assert release_error_exit_code(error) != 0


def test_print_release_error_includes_hint_and_details() -> None:
    console = MockConsole()
    error = ReleaseError(
        kind="tag_push_failed",
        message="failed to push tag v1.3.0",
        hint="permission denied",
        details=("rolled back: delete local tag v1.3.0",),
    )

    print_release_error(error, console)

    assert console.messages[0] == "error: [tag_push_failed] failed to push tag v1.3.0"
    assert console.outputs[1].message == "hint: permission denied"
    assert console.outputs[1].style == Style.DIM
    assert "rolled back: delete local tag v1.3.0" in console.messages[2]


def test_pretty() -> None:
    assert ReleaseError(kind="gh_missing", message="gh: missing").pretty() == "gh: missing"
    assert (
        ReleaseError(kind="gh_missing", message="gh: missing", hint="install it").pretty()
        == "gh: missing (hint: install it)"
    )
