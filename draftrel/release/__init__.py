"""Release bounded context.

- history / semver / bump: base tag, commit range and next version
- classify / contributors / resolve: per-commit notes entries and handles
- notes: Markdown document assembly
- publisher: tag + draft release with compensating rollback
- service: the end-to-end flow used by the CLI
"""

from __future__ import annotations
