"""draftrel: next-version computation, release notes and draft GitHub releases."""

__version__ = "0.1.0"
