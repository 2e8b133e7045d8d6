"""Folder name tokenizing and identity-token validation.

Photo-set folders arrive named by third parties, e.g.::

    [MetArt][Emma]Summer Dreams
    Emma @ MetArt
    2023-05-01 - Playboy - Jane Doe
    [XiuRen] NO.1234 杨晨晨 [100P+2V328M]

The helpers here split such names into candidate tokens and decide
whether a token looks like a studio or model name rather than noise
(sizes, resolutions, counters, dates, serial numbers).
"""

import re
from typing import List, Tuple

# Ideographs from the CJK Unified Ideographs block
_CJK = "\u4e00-\u9fff"

_NUMERIC_RE = re.compile(r"^\d+$")
_DATE_RE = re.compile(r"^\d{4}[-.]\d{1,2}[-.]\d{1,2}$")
_LEADING_DATE_RE = re.compile(r"^\d{4}[-.]\d{1,2}[-.]\d{1,2}")
# 100P+2V, 29P+1V328M, 1.2GB, 4K
_SIZE_MARKER_RE = re.compile(
    r"^(?:\d+(?:\.\d+)?\s*(?:GB|MB|P|V|K|M)\s*\+?\s*)+$", re.IGNORECASE
)
_SERIAL_RE = re.compile(r"^NO\.\s*\d+$", re.IGNORECASE)
_LEADING_SERIAL_RE = re.compile(r"^NO\.\s*\d+", re.IGNORECASE)

_BRACKET_GROUP_RE = re.compile(r"\[([^\[\]]*)\]")

_CJK_NAME_RE = re.compile(rf"^([{_CJK}]{{2,8}})(?![{_CJK}])")
_ENGLISH_NAME_RE = re.compile(r"^([A-Z][a-z]+(?: [A-Z][a-z]+)?)(?![A-Za-z])")
_WORD_SPLIT_RE = re.compile(r"[\s\-_]+")
_PLAIN_WORD_RE = re.compile(rf"^[A-Za-z0-9{_CJK}]+$")

SEPARATOR_CHARS = " \t-_@.,·|/~+&"


def is_identity_token(text: str) -> bool:
    """Check whether text plausibly names a studio or a model.

    Rejects purely numeric strings, dates (YYYY-MM-DD / YYYY.MM.DD),
    size and format markers (100P+2V, 1.2GB, 4K), serial markers (NO.123)
    and anything shorter than two characters.

    Args:
        text: Candidate token.

    Returns:
        True if the token may be identity text.
    """
    if text is None:
        return False

    token = text.strip()
    if len(token) < 2:
        return False

    if _NUMERIC_RE.match(token):
        return False
    if _DATE_RE.match(token):
        return False
    if _SIZE_MARKER_RE.match(token):
        return False
    if _SERIAL_RE.match(token):
        return False

    return True


def is_date_token(text: str) -> bool:
    """Check if text is a bare YYYY-MM-DD or YYYY.MM.DD date."""
    return bool(_DATE_RE.match(text.strip()))


def extract_candidate_names(text: str) -> List[str]:
    """Extract a person name from the start of free text.

    Tried in order, the first match wins:

    1. a leading run of 2-8 CJK ideographs followed by a non-ideograph;
    2. a leading English name, ``Capitalized`` or ``Capitalized Capitalized``;
    3. the first whitespace/hyphen/underscore delimited word, if it passes
       :func:`is_identity_token` and is made only of letters, digits or CJK.

    Args:
        text: Residual text left after removing known parts of a folder name.

    Returns:
        List with at most one name, empty if nothing matched.
    """
    text = text.strip()
    if not text:
        return []

    match = _CJK_NAME_RE.match(text)
    if match:
        return [match.group(1)]

    match = _ENGLISH_NAME_RE.match(text)
    if match:
        return [match.group(1)]

    words = [word for word in _WORD_SPLIT_RE.split(text) if word]
    if words:
        first = words[0]
        if is_identity_token(first) and _PLAIN_WORD_RE.match(first):
            return [first]

    return []


def find_bracket_groups(text: str) -> List[Tuple[str, int]]:
    """Find all ``[...]`` groups in order.

    Args:
        text: Folder name.

    Returns:
        List of (stripped inner text, start offset) tuples.
    """
    return [(match.group(1).strip(), match.start()) for match in _BRACKET_GROUP_RE.finditer(text)]


def strip_bracket_groups(text: str) -> str:
    """Remove every ``[...]`` group from text."""
    return _BRACKET_GROUP_RE.sub(" ", text)


def strip_separators(text: str) -> str:
    """Strip leading and trailing separator characters."""
    return text.strip(SEPARATOR_CHARS)


def strip_leading_date(text: str) -> str:
    """Remove a leading YYYY-MM-DD / YYYY.MM.DD prefix."""
    return _LEADING_DATE_RE.sub("", text, count=1)


def strip_leading_serial(text: str) -> str:
    """Remove a leading NO.<digits> prefix."""
    return _LEADING_SERIAL_RE.sub("", text, count=1)


def remove_name_occurrences(text: str, name: str) -> str:
    """Remove bracketed and bare occurrences of name, ignoring case.

    Args:
        text: Text to clean.
        name: Name to remove.

    Returns:
        Text without the name.
    """
    if not name:
        return text

    escaped = re.escape(name)
    text = re.sub(rf"\[\s*{escaped}\s*\]", " ", text, flags=re.IGNORECASE)
    return re.sub(escaped, " ", text, flags=re.IGNORECASE)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return re.sub(r"\s+", " ", text).strip()
