"""Reader/writer for flat ``key=value`` property files.

The format is the classic Java ``.properties`` text format, which is what
existing ``.gapic`` files on disk use:

  * ``#`` and ``!`` start comment lines, blank lines are ignored
  * the key ends at the first unescaped ``=``, ``:`` or whitespace
  * a line ending in an odd number of backslashes continues on the next line
  * ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes

Parsing is lenient: a malformed line never raises, it yields whatever key and
value the line spells out.
"""

from __future__ import annotations

import re
import string
import time
from typing import Dict, Iterable, Iterator, Mapping, Optional, TextIO, Tuple


_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")

_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Join continuation lines and drop comments / blank lines."""
    pending: Optional[str] = None
    for line in lines:
        if pending is None:
            line = line.lstrip(_WHITESPACE)
            if not line or line[0] in "#!":
                continue
        else:
            line = line.lstrip(_WHITESPACE)

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2:
            pending = (pending or "") + line[:-1]
            continue

        yield (pending or "") + line
        pending = None

    # Continuation marker on the very last line.
    if pending is not None:
        yield pending


def _split_entry(line: str) -> Tuple[str, str]:
    escaped = False
    for i, ch in enumerate(line):
        if escaped:
            escaped = False
            continue
        if ch == "\\":
            escaped = True
            continue
        if ch in _SEPARATORS:
            return line[:i], line[i + 1 :].lstrip(_WHITESPACE)
        if ch in _WHITESPACE:
            rest = line[i:].lstrip(_WHITESPACE)
            if rest[:1] and rest[0] in _SEPARATORS:
                rest = rest[1:].lstrip(_WHITESPACE)
            return line[:i], rest
    return line, ""


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text

    out = []
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        i += 1
        if ch != "\\":
            out.append(ch)
            continue
        if i >= n:
            break
        ch = text[i]
        i += 1
        if ch == "u":
            digits = text[i : i + 4]
            if len(digits) == 4 and all(d in string.hexdigits for d in digits):
                out.append(chr(int(digits, 16)))
                i += 4
            else:
                # Malformed escape: keep it as written.
                out.append("\\u")
        else:
            out.append(_UNESCAPES.get(ch, ch))
    return _join_surrogates("".join(out))


def _join_surrogates(text: str) -> str:
    # "\uD83D\uDE00" is one character written as a UTF-16 pair; lone halves stay.
    if not _SURROGATE_RE.search(text):
        return text
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def parse_properties(lines: Iterable[str]) -> Dict[str, str]:
    """Parse physical lines (without line terminators) into a flat mapping.

    Later entries override earlier ones with the same key.
    """
    props: Dict[str, str] = {}
    for line in _logical_lines(lines):
        key, value = _split_entry(line)
        props[_unescape(key)] = _unescape(value)
    return props


def load_properties(text: str) -> Dict[str, str]:
    """Parse the full text of a property file."""
    return parse_properties(_LINE_BREAK_RE.split(text))


def _escape(text: str, *, is_key: bool) -> str:
    out = []
    for i, ch in enumerate(text):
        if ch == " ":
            out.append("\\ " if (is_key or i == 0) else " ")
        elif ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F or 0xD800 <= ord(ch) <= 0xDFFF:
            out.append("\\u%04X" % ord(ch))
        else:
            out.append(ch)
    return "".join(out)


def format_timestamp(now: Optional[float] = None) -> str:
    return time.strftime("%a %b %d %H:%M:%S %Z %Y", time.localtime(now))


def dump_properties(
    props: Mapping[str, str],
    comments: Optional[str] = None,
    *,
    timestamp: bool = True,
) -> str:
    """Serialize ``props`` as property-file text.

    ``comments`` may span several lines; each becomes a ``#`` line. Entries
    are written sorted by key so repeated saves produce stable files.
    """
    lines = []
    if comments is not None:
        for comment in _LINE_BREAK_RE.split(comments):
            lines.append("#" + comment)
    if timestamp:
        lines.append("#" + format_timestamp())
    for key in sorted(props):
        lines.append(_escape(key, is_key=True) + "=" + _escape(props[key], is_key=False))
    return "\n".join(lines) + "\n"


def store_properties(
    fp: TextIO,
    props: Mapping[str, str],
    comments: Optional[str] = None,
    *,
    timestamp: bool = True,
) -> None:
    fp.write(dump_properties(props, comments, timestamp=timestamp))


__all__ = [
    "dump_properties",
    "format_timestamp",
    "load_properties",
    "parse_properties",
    "store_properties",
]
