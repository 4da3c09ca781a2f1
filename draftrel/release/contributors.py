from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from draftrel.release.model import Commit

# [<id>+]<handle>@users.noreply.<host>
_NOREPLY_RE = re.compile(r"^(?:\d+\+)?(?P<handle>[^@+\s]+)@users\.noreply\.[^@\s]+$")


class PrAuthorLookup(Protocol):
    def pr_author_login(self, number: int) -> str | None: ...


def handle_from_noreply(email: str) -> str | None:
    m = _NOREPLY_RE.match(email.strip())
    if m is None:
        return None
    return m.group("handle")


def resolve_handle(commit: Commit, pr_number: int | None, host: PrAuthorLookup) -> str:
    """Contributor handle for one commit.

    Precedence: no-reply email (no network), then the PR author login, then
    the author name recorded in history.
    """
    handle = handle_from_noreply(commit.author_email)
    if handle is not None:
        return handle

    if pr_number is not None:
        login = host.pr_author_login(pr_number)
        if login:
            return login

    return commit.author_name


def sorted_handles(handles: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted({h for h in handles if h}))
