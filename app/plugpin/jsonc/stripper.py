"""String-aware JSONC scanner and stripper.

Removes ``//`` line comments, ``/* */`` block comments and trailing commas
so that the result can be handed to :func:`json.loads`, while passing the
contents of every double-quoted string literal through untouched.

The scanner is a small character state machine rather than a regular
expression, so pathological input cannot trigger catastrophic backtracking
and malformed input (an unterminated string or block comment) never raises.
"""

from enum import Enum


class CharClass(str, Enum):
    """Lexical class of a single character in a JSONC buffer.

    Attributes:
        PLAIN: Structural JSON text outside strings and comments.
        STRING: Part of a double-quoted string literal, quotes included.
        LINE_COMMENT: Part of a ``//`` comment (line terminator excluded).
        BLOCK_COMMENT: Part of a ``/* */`` comment, delimiters included.
    """

    PLAIN = "plain"
    STRING = "string"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"


_COMMENT_CLASSES = frozenset({CharClass.LINE_COMMENT, CharClass.BLOCK_COMMENT})


def classify(text: str) -> list[CharClass]:
    """Classify every character of ``text``.

    Args:
        text: Arbitrary text, not required to be valid JSON.

    Returns:
        List with one CharClass per character of ``text``.
    """
    classes: list[CharClass] = []
    state = CharClass.PLAIN
    length = len(text)
    i = 0

    while i < length:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if state is CharClass.PLAIN:
            if ch == "\\" and nxt == '"':
                # A stray escaped quote never opens a string.
                classes += [CharClass.PLAIN, CharClass.PLAIN]
                i += 2
                continue
            if ch == '"':
                state = CharClass.STRING
                classes.append(CharClass.STRING)
            elif ch == "/" and nxt == "/":
                state = CharClass.LINE_COMMENT
                classes += [CharClass.LINE_COMMENT, CharClass.LINE_COMMENT]
                i += 2
                continue
            elif ch == "/" and nxt == "*":
                state = CharClass.BLOCK_COMMENT
                classes += [CharClass.BLOCK_COMMENT, CharClass.BLOCK_COMMENT]
                i += 2
                continue
            else:
                classes.append(CharClass.PLAIN)

        elif state is CharClass.STRING:
            if ch == "\\" and nxt:
                classes += [CharClass.STRING, CharClass.STRING]
                i += 2
                continue
            classes.append(CharClass.STRING)
            if ch == '"':
                state = CharClass.PLAIN

        elif state is CharClass.LINE_COMMENT:
            if ch in "\r\n":
                state = CharClass.PLAIN
                classes.append(CharClass.PLAIN)
            else:
                classes.append(CharClass.LINE_COMMENT)

        else:
            if ch == "*" and nxt == "/":
                state = CharClass.PLAIN
                classes += [CharClass.BLOCK_COMMENT, CharClass.BLOCK_COMMENT]
                i += 2
                continue
            classes.append(CharClass.BLOCK_COMMENT)

        i += 1

    return classes


def scan_plain_mask(text: str) -> list[bool]:
    """Return a mask that is True for characters in plain JSON text.

    Characters inside string literals (including their quotes) and inside
    comments are False.

    Args:
        text: Text to scan.

    Returns:
        One boolean per character of ``text``.
    """
    return [c is CharClass.PLAIN for c in classify(text)]


def strip_comments(text: str) -> str:
    """Remove line and block comments outside string literals."""
    classes = classify(text)
    return "".join(ch for ch, c in zip(text, classes, strict=True) if c not in _COMMENT_CLASSES)


def strip_trailing_commas(text: str) -> str:
    """Remove commas followed only by whitespace and a closing ``}`` or ``]``.

    Strings are re-detected here, so ``"[a,]"`` or ``"{,}"`` inside a
    literal is left alone.
    """
    plain = scan_plain_mask(text)
    length = len(text)
    out: list[str] = []

    for i, ch in enumerate(text):
        if ch == "," and plain[i]:
            j = i + 1
            while j < length and text[j].isspace():
                j += 1
            if j < length and plain[j] and text[j] in "}]":
                continue
        out.append(ch)

    return "".join(out)


def strip_jsonc(text: str) -> str:
    """Strip comments and trailing commas from JSONC text.

    Args:
        text: JSONC (or plain JSON) text.

    Returns:
        Text suitable for a strict JSON parser. Empty and whitespace-only
        input is returned unchanged.
    """
    if not text.strip():
        return text
    return strip_trailing_commas(strip_comments(text))
