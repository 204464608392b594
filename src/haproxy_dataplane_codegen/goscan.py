"""
Minimal Go source scanner.

Just enough of the Go lexical grammar to find top-level ``type X struct``
and ``type X interface`` declarations and the exact span of their bodies.
Comments, interpreted strings, raw strings (struct tags) and rune literals
are consumed as single tokens so braces inside them never affect depth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import CodegenError

IDENT = "ident"
PUNCT = "punct"
STRING = "string"
COMMENT = "comment"


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    start: int
    end: int


@dataclass(frozen=True)
class TypeDecl:
    name: str
    kind: str
    start: int
    end: int
    line: int


class GoScanError(CodegenError):
    pass


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ch.isalpha()


def _is_ident_part(ch: str) -> bool:
    return ch == "_" or ch.isalnum()


def _scan_quoted(source: str, pos: int, quote: str) -> int:
    i = pos + 1
    n = len(source)
    while i < n:
        ch = source[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        if ch == "\n":
            break
        i += 1
    raise GoScanError(f"unterminated literal at offset {pos}")


def tokenize(source: str) -> Iterator[Token]:
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if ch.isspace():
            i += 1
            continue
        if source.startswith("//", i):
            end = source.find("\n", i)
            end = n if end == -1 else end
            yield Token(COMMENT, source[i:end], i, end)
            i = end
            continue
        if source.startswith("/*", i):
            end = source.find("*/", i + 2)
            if end == -1:
                raise GoScanError(f"unterminated block comment at offset {i}")
            yield Token(COMMENT, source[i : end + 2], i, end + 2)
            i = end + 2
            continue
        if ch == "`":
            end = source.find("`", i + 1)
            if end == -1:
                raise GoScanError(f"unterminated raw string at offset {i}")
            yield Token(STRING, source[i : end + 1], i, end + 1)
            i = end + 1
            continue
        if ch in "\"'":
            end = _scan_quoted(source, i, ch)
            yield Token(STRING, source[i:end], i, end)
            i = end
            continue
        if _is_ident_start(ch):
            end = i + 1
            while end < n and _is_ident_part(source[end]):
                end += 1
            yield Token(IDENT, source[i:end], i, end)
            i = end
            continue
        yield Token(PUNCT, ch, i, i + 1)
        i += 1


def _line_start(source: str, offset: int) -> int:
    return source.rfind("\n", 0, offset) + 1


def _line_end(source: str, offset: int) -> int:
    end = source.find("\n", offset)
    return len(source) if end == -1 else end + 1


def _doc_comment_start(source: str, type_offset: int) -> int:
    start = _line_start(source, type_offset)
    while start > 0:
        prev_start = _line_start(source, start - 1)
        if not source[prev_start : start - 1].strip().startswith("//"):
            break
        start = prev_start
    return start


def _trailing_blank_line_end(source: str, end: int) -> int:
    if end >= len(source):
        return end
    next_end = _line_end(source, end)
    if source[end:next_end].strip():
        return end
    return next_end


def find_type_decls(source: str) -> list[TypeDecl]:
    """
    Return the top-level struct/interface type declarations in ``source``.

    ``start`` is the first line of the doc comment directly above the
    declaration (or the ``type`` line itself); ``end`` is just past the line
    holding the matching closing brace plus at most one blank line.
    """

    tokens = [tok for tok in tokenize(source) if tok.kind != COMMENT]
    decls: list[TypeDecl] = []
    depth = 0
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.kind == PUNCT and tok.value in "{([":
            depth += 1
        elif tok.kind == PUNCT and tok.value in "})]":
            depth -= 1
        elif (
            depth == 0
            and tok.kind == IDENT
            and tok.value == "type"
            and i + 3 < len(tokens)
            and tokens[i + 1].kind == IDENT
            and tokens[i + 2].kind == IDENT
            and tokens[i + 2].value in {"struct", "interface"}
            and tokens[i + 3].value == "{"
        ):
            close = _matching_brace(tokens, i + 3)
            end = _trailing_blank_line_end(source, _line_end(source, tokens[close].start))
            decls.append(
                TypeDecl(
                    name=tokens[i + 1].value,
                    kind=tokens[i + 2].value,
                    start=_doc_comment_start(source, tok.start),
                    end=end,
                    line=source.count("\n", 0, tok.start) + 1,
                )
            )
            i = close + 1
            continue
        i += 1
    return decls


def _matching_brace(tokens: list[Token], open_index: int) -> int:
    depth = 0
    for idx in range(open_index, len(tokens)):
        tok = tokens[idx]
        if tok.kind != PUNCT:
            continue
        if tok.value == "{":
            depth += 1
        elif tok.value == "}":
            depth -= 1
            if depth == 0:
                return idx
    raise GoScanError(f"unbalanced braces after offset {tokens[open_index].start}")


def remove_spans(source: str, spans: list[tuple[int, int]]) -> str:
    out = source
    for start, end in sorted(spans, reverse=True):
        out = out[:start] + out[end:]
    return out
