"""Process exit codes for the draftrel CLI.

The numeric values are part of the CLI contract and should remain stable:
- 0: Success (including "nothing to release")
- 1: User error (bad input, invalid arguments, broken config)
- 2: Environment error (gh missing or unauthenticated, no usable base tag)
- 3: Publish error (tag or release step failed and was rolled back)
- 4: Network error (history provider unreachable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    PUBLISH_ERROR = 3
    NETWORK_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
