"""Small text helpers for scanning Rust source code.

Positions are UTF-8 byte offsets into the text, matching how source
locations are counted elsewhere in the package.
"""

from __future__ import annotations

import enum
import hashlib
import itertools
from dataclasses import dataclass
from typing import Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


class SearchType(enum.Enum):
    """How a search string is compared with a candidate."""

    EXACT_MATCH = "exact"
    STARTS_WITH = "starts_with"


@dataclass(frozen=True)
class ByteRange:
    """A half-open range of byte offsets."""

    start: int
    end: int

    @property
    def slice(self) -> slice:
        return slice(self.start, self.end)


_EMPTY = object()


class StackNode(Generic[T]):
    """An immutable stack built as a linked list of nodes.

    ``StackNode()`` is the empty stack; ``push`` returns a new node and
    leaves the old one unchanged.
    """

    __slots__ = ("_item", "_previous")

    def __init__(self) -> None:
        self._item: object = _EMPTY
        self._previous: Optional[StackNode[T]] = None

    def push(self, item: T) -> "StackNode[T]":
        node: StackNode[T] = StackNode()
        node._item = item
        node._previous = self
        return node

    def __iter__(self) -> Iterator[T]:
        node: Optional[StackNode[T]] = self
        while node is not None and node._item is not _EMPTY:
            yield node._item  # type: ignore[misc]
            node = node._previous

    def __contains__(self, item: object) -> bool:
        return any(current == item for current in self)


def _utf8_len(ch: str) -> int:
    code = ord(ch)
    if code < 0x80:
        return 1
    if code < 0x800:
        return 2
    if code < 0x10000:
        return 3
    return 4


def _char_indices(s: str) -> Iterator[tuple[int, str]]:
    offset = 0
    for ch in s:
        yield offset, ch
        offset += _utf8_len(ch)


def is_pattern_char(c: str) -> bool:
    return c.isalnum() or c.isspace() or c in "_:."


def is_search_expr_char(c: str) -> bool:
    return c.isalnum() or c in "_:."


def is_ident_char(c: str) -> bool:
    return c.isalnum() or c in "_!"


def is_whitespace_byte(b: int) -> bool:
    return b in (0x20, 0x0D, 0x0A, 0x09)


def _match_indices(haystack: bytes, needle: bytes) -> Iterator[int]:
    pos = haystack.find(needle)
    while pos != -1:
        yield pos
        pos = haystack.find(needle, pos + len(needle))


def txt_matches(stype: SearchType, needle: str, haystack: str) -> bool:
    """Whether ``needle`` occurs in ``haystack`` as a standalone identifier."""
    return txt_matches_with_pos(stype, needle, haystack) is not None


def txt_matches_with_pos(
    stype: SearchType, needle: str, haystack: str
) -> Optional[int]:
    """Byte offset of the first identifier-bounded occurrence of ``needle``."""
    if not needle:
        return 0
    hay = haystack.encode("utf-8")
    pattern = needle.encode("utf-8")
    for n in _match_indices(hay, pattern):
        before_ok = n == 0 or not is_ident_char(char_before(haystack, n))
        if not before_ok:
            continue
        if stype is SearchType.STARTS_WITH:
            return n
        end = n + len(pattern)
        if end == len(hay) or not is_ident_char(char_at(haystack, end)):
            return n
    return None


def symbol_matches(stype: SearchType, searchstr: str, candidate: str) -> bool:
    if stype is SearchType.EXACT_MATCH:
        return searchstr == candidate
    return candidate.startswith(searchstr)


def find_closure(src: str) -> Optional[tuple[ByteRange, ByteRange]]:
    """Locate a closure: the range of its argument pipes and of its body."""
    found = closure_valid_arg_scope(src)
    if found is None:
        return None
    pipe_range, _ = found
    chars = itertools.dropwhile(
        lambda ic: ic[1].isspace(),
        itertools.islice(enumerate(src), pipe_range.end, None),
    )
    first = next(chars, None)
    if first is None:
        return None
    index, start_char = first
    start = index + 1 if start_char == "{" else index

    clevel = 1 if start_char == "{" else 0
    plevel = 0
    last: Optional[int] = None
    for i, current in chars:
        if current == "{":
            clevel += 1
        elif current == "(":
            plevel += 1
        elif current == "}":
            clevel -= 1
            if (clevel == 0 and start_char == "{") or clevel == -1:
                last = i
                break
        elif current == ";":
            if start_char != "{":
                last = i
                break
        elif current == ")":
            plevel -= 1
            if plevel == 0:
                last = i + 1
            if plevel == -1:
                last = i + 1
                break
    if last is None:
        return None
    return pipe_range, ByteRange(start, last)


def closure_valid_arg_scope(scope_src: str) -> Optional[tuple[ByteRange, str]]:
    """Find a ``|...|`` closure argument list, returning its range and text."""
    data = scope_src.encode("utf-8")
    left_pipe = data.find(b"|")
    if left_pipe == -1:
        return None
    candidate = data[left_pipe:].decode("utf-8")
    brace_level = 0
    for i, c in enumerate(itertools.islice(candidate, 1, None)):
        if c == "{":
            brace_level += 1
        elif c == "}":
            brace_level -= 1
        elif c == "|":
            if brace_level == 0:
                right_pipe = left_pipe + 1 + i
                rng = ByteRange(left_pipe, right_pipe + 1)
                return rng, data[rng.slice].decode("utf-8")
            break
        elif c == ";":
            break
        if brace_level < 0:
            break
    return None


def find_ident_end(s: str, pos: int) -> int:
    """Byte offset just past the identifier starting at ``pos``."""
    data = s.encode("utf-8")
    tail = data[pos:].decode("utf-8")
    for i, c in _char_indices(tail):
        if not is_ident_char(c):
            return pos + i
    return len(data)


def char_before(src: str, i: int) -> str:
    """The last character starting before byte offset ``i`` (NUL if none)."""
    prev = "\0"
    for ii, ch in _char_indices(src):
        if ii >= i:
            return prev
        prev = ch
    return prev


def char_at(src: str, i: int) -> str:
    """The character starting at byte offset ``i``."""
    data = src.encode("utf-8")
    if i < 0 or i >= len(data):
        raise IndexError(f"byte offset {i} out of range")
    lead = data[i]
    if lead & 0xC0 == 0x80:
        raise ValueError(f"byte offset {i} is not a character boundary")
    if lead < 0x80:
        width = 1
    elif lead < 0xE0:
        width = 2
    elif lead < 0xF0:
        width = 3
    else:
        width = 4
    return data[i : i + width].decode("utf-8")


def _strip_word_impl(data: bytes, allow_paren: bool) -> Optional[int]:
    level = 0
    for i, b in enumerate(data):
        if allow_paren and b == ord("("):
            level += 1
        elif allow_paren and b == ord(")"):
            level -= 1
        elif level >= 1:
            pass
        elif not is_whitespace_byte(b):
            if i == 0:
                break
            return i
    return None


def strip_visibility(src: str) -> Optional[int]:
    """Byte offset past a leading ``pub(...)`` or ``crate`` keyword."""
    data = src.encode("utf-8")
    if data.startswith(b"pub"):
        rest = _strip_word_impl(data[3:], True)
        return None if rest is None else rest + 3
    if data.startswith(b"crate"):
        rest = _strip_word_impl(data[5:], False)
        return None if rest is None else rest + 5
    return None


def strip_word(src: str, word: str) -> Optional[int]:
    """Byte offset past a leading ``word`` and the whitespace after it."""
    data = src.encode("utf-8")
    prefix = word.encode("utf-8")
    if not data.startswith(prefix):
        return None
    rest = _strip_word_impl(data[len(prefix) :], False)
    return None if rest is None else rest + len(prefix)


def strip_words(src: str, words: list[str] | tuple[str, ...]) -> int:
    """Byte offset past each of ``words`` in turn, where present."""
    data = src.encode("utf-8")
    start = 0
    for word in words:
        start += strip_word(data[start:].decode("utf-8"), word) or 0
    return start


def trim_visibility(blob: str) -> str:
    """Drop a leading visibility qualifier such as ``pub(crate)``."""
    start = strip_visibility(blob)
    if start is None:
        return blob
    return blob.encode("utf-8")[start:].decode("utf-8")


def in_fn_name(line_before_point: str) -> bool:
    """Whether the cursor sits in the name of a function being declared."""
    has_started_name = not (line_before_point and line_before_point[-1].isspace())
    words = reversed(line_before_point.split())
    if has_started_name:
        ident = next(words, None)
        if ident is not None and not all(is_ident_char(c) for c in ident):
            return False
    return next(words, None) == "fn"


def calculate_str_hash(s: str) -> int:
    """A stable 64-bit hash of a string."""
    digest = hashlib.blake2b(s.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def gen_tuple_fields(count: int) -> Iterator[str]:
    """Names of tuple fields, ``"0"`` upwards, at most sixteen of them."""
    return (str(i) for i in range(min(count, 16)))