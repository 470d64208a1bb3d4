from __future__ import annotations

import ast
from collections.abc import Iterable, Sequence

from twinscan.core.types import Candidate, CandidateKind
from twinscan.parsing.python_ast import ParseResult


def extract_candidates(parsed: ParseResult, min_lines: int | None = None) -> list[Candidate]:
    """Collect the spans of ``parsed`` worth comparing.

    Every function and lambda is a candidate. Statement bodies are candidates
    only when they are controlled by an ``if``/``else``, a loop or a
    ``try``/``except``/``finally`` clause; a function's own body is already
    covered by the function itself.
    """
    if min_lines is not None and min_lines <= 0:
        raise ValueError("min_lines must be > 0")
    if not parsed.success or parsed.tree is None:
        return []

    candidates: list[Candidate] = []

    def add(kind: CandidateKind, node: ast.AST, first: ast.AST, last: ast.AST) -> None:
        start_line = getattr(first, "lineno", 1)
        end_line = getattr(last, "end_lineno", None) or getattr(last, "lineno", start_line)
        if min_lines is not None and end_line - start_line + 1 < min_lines:
            return
        span_start = parsed.byte_offset(start_line, getattr(first, "col_offset", 0))
        span_end = parsed.byte_offset(end_line, getattr(last, "end_col_offset", 0) or 0)
        candidates.append(
            Candidate(
                kind=kind,
                file_path=parsed.path,
                start_line=start_line,
                end_line=end_line,
                span_start=span_start,
                span_length=span_end - span_start,
                node=node,
                tokens=parsed.tokens_between(span_start, span_end),
            )
        )

    def add_block(node: ast.AST, body: Sequence[ast.stmt]) -> None:
        if body:
            add(CandidateKind.BLOCK, node, body[0], body[-1])

    class Visitor(ast.NodeVisitor):
        def _visit_callable(self, node: ast.AST) -> None:
            add(CandidateKind.METHOD, node, node, node)
            self.generic_visit(node)

        visit_FunctionDef = _visit_callable
        visit_AsyncFunctionDef = _visit_callable

        def visit_Lambda(self, node: ast.Lambda) -> None:
            add(CandidateKind.LAMBDA, node, node, node)
            self.generic_visit(node)

        def visit_If(self, node: ast.If) -> None:
            add_block(node, node.body)
            if not _is_elif_chain(parsed, node.orelse):
                add_block(node, node.orelse)
            self.generic_visit(node)

        def _visit_loop(self, node: ast.For | ast.AsyncFor | ast.While) -> None:
            add_block(node, node.body)
            add_block(node, node.orelse)
            self.generic_visit(node)

        visit_For = _visit_loop
        visit_AsyncFor = _visit_loop
        visit_While = _visit_loop

        def _visit_try(self, node: ast.AST) -> None:
            add_block(node, getattr(node, "body", []))
            add_block(node, getattr(node, "orelse", []))
            add_block(node, getattr(node, "finalbody", []))
            self.generic_visit(node)

        visit_Try = _visit_try
        visit_TryStar = _visit_try

        def visit_ExceptHandler(self, node: ast.ExceptHandler) -> None:
            add_block(node, node.body)
            self.generic_visit(node)

    Visitor().visit(parsed.tree)
    return candidates


def extract_many(results: Iterable[ParseResult], min_lines: int | None = None) -> list[Candidate]:
    candidates: list[Candidate] = []
    for parsed in results:
        candidates.extend(extract_candidates(parsed, min_lines))
    return candidates


def _is_elif_chain(parsed: ParseResult, orelse: Sequence[ast.stmt]) -> bool:
    # ``elif`` parses as an ``If`` alone in ``orelse``, positioned on the keyword.
    if len(orelse) != 1 or not isinstance(orelse[0], ast.If):
        return False
    node = orelse[0]
    offset = parsed.byte_offset(node.lineno, node.col_offset)
    return parsed.source.startswith(b"elif", offset)
