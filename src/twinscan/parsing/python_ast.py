from __future__ import annotations

import ast
import io
import keyword
import tokenize
import warnings
from bisect import bisect_left
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Literal

from twinscan.core.types import LexToken, TokenCategory

Severity = Literal["error", "warning"]

_TRIVIA = {"COMMENT", "NL", "ENCODING", "ENDMARKER"}
_STRING_PARTS = {"STRING", "FSTRING_MIDDLE", "TSTRING_MIDDLE"}


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    message: str
    line: int | None = None


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of reading and parsing one Python source file.

    On success ``tree`` holds the module and ``tokens`` the flat stream of
    leaf tokens with absolute UTF-8 byte offsets, sorted by position. On
    failure both are empty and ``diagnostics`` / ``error_message`` explain why.
    """

    path: str
    success: bool
    tree: ast.Module | None = None
    tokens: tuple[LexToken, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
    error_message: str | None = None
    source: bytes = field(default=b"", repr=False)
    line_offsets: tuple[int, ...] = field(default=(), repr=False)
    token_starts: tuple[int, ...] = field(default=(), repr=False)

    @property
    def error_count(self) -> int:
        return sum(1 for diag in self.diagnostics if diag.severity == "error")

    def byte_offset(self, line: int, col: int) -> int:
        """Absolute byte offset of an ``ast`` position (1-based line, byte column)."""
        return self.line_offsets[line - 1] + col

    def tokens_between(self, start: int, end: int) -> tuple[LexToken, ...]:
        """Tokens lying inside ``[start, end)``.

        Zero-width DEDENTs sitting on ``start`` close the preceding code, not
        the span, and are left out.
        """
        selected: list[LexToken] = []
        idx = bisect_left(self.token_starts, start)
        while idx < len(self.tokens) and self.tokens[idx].start < end:
            token = self.tokens[idx]
            if start < token.end <= end:
                selected.append(token)
            idx += 1
        return tuple(selected)


def parse_file(path: str) -> ParseResult:
    try:
        with tokenize.open(path) as handle:
            text = handle.read()
    except (OSError, SyntaxError, UnicodeDecodeError) as exc:
        # SyntaxError here means a bad PEP 263 encoding cookie.
        return ParseResult(path=path, success=False, error_message=str(exc))
    return parse_source(text, path)


def parse_source(text: str, path: str = "<string>") -> ParseResult:
    diagnostics: list[Diagnostic] = []
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            tree = ast.parse(text, filename=path)
        tokens, line_offsets = _lex(text)
    except SyntaxError as exc:
        diagnostics.append(
            Diagnostic(severity="error", message=exc.msg or str(exc), line=exc.lineno)
        )
        return ParseResult(path=path, success=False, diagnostics=tuple(diagnostics))
    except ValueError as exc:
        # Source containing null bytes on older interpreters.
        diagnostics.append(Diagnostic(severity="error", message=str(exc)))
        return ParseResult(path=path, success=False, diagnostics=tuple(diagnostics))
    except tokenize.TokenError as exc:
        message = exc.args[0] if exc.args else str(exc)
        line = exc.args[1][0] if len(exc.args) > 1 else None
        diagnostics.append(Diagnostic(severity="error", message=str(message), line=line))
        return ParseResult(path=path, success=False, diagnostics=tuple(diagnostics))
    for warning in caught:
        diagnostics.append(
            Diagnostic(severity="warning", message=str(warning.message), line=warning.lineno)
        )
    return ParseResult(
        path=path,
        success=True,
        tree=tree,
        tokens=tokens,
        diagnostics=tuple(diagnostics),
        source=text.encode("utf-8"),
        line_offsets=line_offsets,
        token_starts=tuple(token.start for token in tokens),
    )


def parse_files(paths: Iterable[str]) -> Iterator[ParseResult]:
    for path in paths:
        yield parse_file(path)


def _lex(text: str) -> tuple[tuple[LexToken, ...], tuple[int, ...]]:
    lines = io.StringIO(text).readlines()
    line_offsets: list[int] = []
    offset = 0
    for line in lines:
        line_offsets.append(offset)
        offset += len(line.encode("utf-8"))
    # tokenize may report positions on the virtual line after the last one.
    line_offsets.append(offset)

    def to_offset(row: int, col: int) -> int:
        if row - 1 >= len(lines):
            return line_offsets[-1]
        return line_offsets[row - 1] + len(lines[row - 1][:col].encode("utf-8"))

    tokens: list[LexToken] = []
    for tok in tokenize.generate_tokens(io.StringIO(text).readline):
        name = tokenize.tok_name[tok.type]
        if name in _TRIVIA:
            continue
        tokens.append(
            LexToken(
                category=_categorize(name, tok.string),
                text=_text(name, tok.string),
                start=to_offset(*tok.start),
                end=to_offset(*tok.end),
            )
        )
    return tuple(tokens), tuple(line_offsets)


def _categorize(name: str, text: str) -> TokenCategory:
    if name == "NAME":
        return TokenCategory.OTHER if keyword.iskeyword(text) else TokenCategory.IDENTIFIER
    if name == "NUMBER":
        return TokenCategory.NUMERIC
    if name in _STRING_PARTS:
        return TokenCategory.STRING
    return TokenCategory.OTHER


def _text(name: str, text: str) -> str:
    if name in {"NAME", "NUMBER", "OP", "ERRORTOKEN"} or name in _STRING_PARTS:
        return text
    # Layout and f-string delimiter tokens: the kind matters, not the spelling.
    return name
