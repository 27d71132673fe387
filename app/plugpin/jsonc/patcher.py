"""Surgical, comment-preserving edits of a single JSONC array entry.

The document is never parsed and re-serialized. The named array is
located in the raw text by bracket-depth matching, one quoted element is
swapped by string substitution, and every other byte (comments, key order,
whitespace, numeric formatting) is kept as-is.
"""

import re
from dataclasses import dataclass
from enum import Enum

from plugpin.jsonc.stripper import CharClass, classify


class PatchStatus(str, Enum):
    """Outcome of a single-entry patch.

    Attributes:
        UPDATED: The entry was replaced and the text changed.
        UNCHANGED: The entry was found but replacing it was a no-op.
        NO_ARRAY: The named array does not exist in the document.
        ENTRY_NOT_FOUND: The array exists but does not contain the entry.
    """

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    NO_ARRAY = "no_array"
    ENTRY_NOT_FOUND = "entry_not_found"


@dataclass(frozen=True, slots=True)
class ArraySpan:
    """Location of an array body inside a document.

    Attributes:
        start: Index just after the opening ``[``.
        end: Index of the matching closing ``]``.
    """

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class PatchResult:
    """Result of :func:`replace_entry`.

    Attributes:
        text: Patched document, or the input verbatim when nothing changed.
        status: What happened.
    """

    text: str
    status: PatchStatus

    @property
    def changed(self) -> bool:
        """Whether the returned text differs from the input."""
        return self.status is PatchStatus.UPDATED


def _opens_string(classes: list[CharClass], index: int) -> bool:
    """Check whether ``index`` holds the opening quote of a string literal."""
    if classes[index] is not CharClass.STRING:
        return False
    return index == 0 or classes[index - 1] is not CharClass.STRING


def _find_array(text: str, key: str, classes: list[CharClass]) -> ArraySpan | None:
    pattern = re.compile(r'"' + re.escape(key) + r'"\s*:\s*\[')

    for match in pattern.finditer(text):
        # Ignore occurrences inside comments or other string literals.
        if not _opens_string(classes, match.start()):
            continue
        if classes[match.end() - 1] is not CharClass.PLAIN:
            continue

        depth = 1
        for i in range(match.end(), len(text)):
            if classes[i] is not CharClass.PLAIN:
                continue
            if text[i] == "[":
                depth += 1
            elif text[i] == "]":
                depth -= 1
                if depth == 0:
                    return ArraySpan(start=match.end(), end=i)
        return None

    return None


def locate_array(text: str, key: str) -> ArraySpan | None:
    """Find the body of the first ``"key": [...]`` array in raw JSONC text.

    Brackets inside string literals and comments do not affect the depth
    count.

    Args:
        text: Raw document text (comments allowed).
        key: Object key naming the array.

    Returns:
        ArraySpan of the array body, or None if absent or unbalanced.
    """
    return _find_array(text, key, classify(text))


def replace_entry(text: str, key: str, old_entry: str, new_entry: str) -> PatchResult:
    """Replace one quoted string element of a named array.

    Only the first occurrence of ``old_entry`` (wrapped in matching single
    or double quotes) inside the array body is replaced; the new value keeps
    the quote character it was found with.

    Args:
        text: Raw document text.
        key: Object key naming the array (e.g. ``"plugin"``).
        old_entry: Element value to replace.
        new_entry: Replacement value.

    Returns:
        PatchResult. For every status other than UPDATED the returned text
        is exactly the input text.
    """
    classes = classify(text)
    span = _find_array(text, key, classes)
    if span is None:
        return PatchResult(text=text, status=PatchStatus.NO_ARRAY)

    body = text[span.start : span.end]
    pattern = re.compile(r"([\"'])" + re.escape(old_entry) + r"\1")

    for match in pattern.finditer(body):
        index = span.start + match.start()
        quote = match.group(1)
        if quote == '"' and not _opens_string(classes, index):
            continue
        if quote == "'" and classes[index] is not CharClass.PLAIN:
            continue

        patched_body = body[: match.start()] + quote + new_entry + quote + body[match.end() :]
        patched = text[: span.start] + patched_body + text[span.end :]
        if patched == text:
            return PatchResult(text=text, status=PatchStatus.UNCHANGED)
        return PatchResult(text=patched, status=PatchStatus.UPDATED)

    return PatchResult(text=text, status=PatchStatus.ENTRY_NOT_FOUND)
