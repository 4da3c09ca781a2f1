"""Error presentation utilities.

Centralized release error formatting and exit code mapping.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from draftrel.core.errors import ErrorCode
from draftrel.output.console import Style
from draftrel.release.errors import ReleaseError

if TYPE_CHECKING:
    from draftrel.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(f"[{error.kind}] {error.message}")
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)
    for line in error.details:
        console.print(f"  {line}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "invalid_input":
            return int(ErrorCode.USER_ERROR)
        case "gh_missing" | "gh_auth_required" | "no_tag_found" | "invalid_base_version":
            return int(ErrorCode.ENV_ERROR)
        case "tag_create_failed" | "tag_push_failed" | "release_create_failed":
            return int(ErrorCode.PUBLISH_ERROR)
        case "history_unavailable":
            return int(ErrorCode.NETWORK_ERROR)
    return int(ErrorCode.USER_ERROR)
