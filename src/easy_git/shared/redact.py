from __future__ import annotations

import re


_URL_CREDENTIALS = re.compile(r"(https?://)[^/@\s:]+(?::[^/@\s]*)?@")
_GITHUB_TOKEN = re.compile(r"\b(gh[pousr]_|github_pat_)[A-Za-z0-9_]{10,}")


def redact(text: str) -> str:
    """Mask credentials embedded in URLs and GitHub token literals."""
    text = _URL_CREDENTIALS.sub(r"\1***@", text)
    return _GITHUB_TOKEN.sub(r"\1***", text)
