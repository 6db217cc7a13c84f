"""
Case conversion for class names and CSS property keys.

Words are split on case changes, digits-to-letters, and any run of
non-alphanumeric characters, then joined lowercase with hyphens:
"backgroundColor" -> "background-color", "HTMLParser" -> "html-parser".
Letters are matched by Unicode category, so "Ärger" -> "ärger".
"""

from __future__ import annotations

import re

# Unicode letters and digits, underscore excluded
_RUN = re.compile(r"[^\W_]+")


def _split_run(run: str) -> list[str]:
    words: list[str] = []
    start = 0
    for i in range(1, len(run)):
        prev, cur = run[i - 1], run[i]
        nxt = run[i + 1] if i + 1 < len(run) else ""
        if not cur.isupper():
            continue
        # fooBar, item2Name | HTMLParser: last capital of an acronym starts a word
        if prev.islower() or prev.isdigit() or (prev.isupper() and nxt.islower()):
            words.append(run[start:i])
            start = i
    words.append(run[start:])
    return words


def split_words(text: str) -> list[str]:
    """Split an identifier into its words, preserving their case."""
    words: list[str] = []
    for run in _RUN.findall(text):
        words.extend(_split_run(run))
    return words


def kebab(text: str) -> str:
    """Convert an identifier to kebab-case. Empty input gives empty output."""
    return "-".join(word.lower() for word in split_words(text))
