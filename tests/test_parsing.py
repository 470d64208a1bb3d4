from pathlib import Path

from twinscan.core.types import TokenCategory
from twinscan.parsing.python_ast import parse_file, parse_files, parse_source


def test_parse_source_token_stream():
    parsed = parse_source("def f(a):\n    return a + 1  # bump\n")
    assert parsed.success
    assert parsed.diagnostics == ()
    assert [tok.text for tok in parsed.tokens] == [
        "def",
        "f",
        "(",
        "a",
        ")",
        ":",
        "NEWLINE",
        "INDENT",
        "return",
        "a",
        "+",
        "1",
        "NEWLINE",
        "DEDENT",
    ]


def test_token_categories():
    parsed = parse_source("x = y if True else 'text' + str(3.5)\n")
    categories = {tok.text: tok.category for tok in parsed.tokens}
    assert categories["x"] is TokenCategory.IDENTIFIER
    assert categories["str"] is TokenCategory.IDENTIFIER
    assert categories["if"] is TokenCategory.OTHER
    assert categories["True"] is TokenCategory.OTHER
    assert categories["'text'"] is TokenCategory.STRING
    assert categories["3.5"] is TokenCategory.NUMERIC
    assert categories["+"] is TokenCategory.OTHER


def test_token_offsets_are_utf8_bytes():
    parsed = parse_source('x = "é"\ny = 1\n')
    y_token = next(tok for tok in parsed.tokens if tok.text == "y")
    assert y_token.start == len('x = "é"\n'.encode())
    assert parsed.source[y_token.start : y_token.end] == b"y"


def test_tokens_between_excludes_partial_tokens():
    parsed = parse_source("alpha = beta\n")
    selected = parsed.tokens_between(0, 7)
    assert [tok.text for tok in selected] == ["alpha", "="]


def test_syntax_error_is_failure_with_diagnostic():
    parsed = parse_source("def oops(:\n  pass\n")
    assert not parsed.success
    assert parsed.tree is None
    assert parsed.tokens == ()
    assert parsed.error_count == 1
    assert parsed.diagnostics[0].severity == "error"


def test_warnings_do_not_fail_parse():
    parsed = parse_source('pattern = "\\d+"\n')
    assert parsed.success
    assert all(diag.severity == "warning" for diag in parsed.diagnostics)
    assert parsed.error_count == 0


def test_unreadable_file_is_failure_without_diagnostics(tmp_path: Path):
    parsed = parse_file(str(tmp_path / "missing.py"))
    assert not parsed.success
    assert parsed.diagnostics == ()
    assert parsed.error_message


def test_parse_files_keeps_input_order(tmp_path: Path):
    first = tmp_path / "b.py"
    second = tmp_path / "a.py"
    first.write_text("x = 1\n", encoding="utf-8")
    second.write_text("y = 2\n", encoding="utf-8")
    results = list(parse_files([str(first), str(second)]))
    assert [result.path for result in results] == [str(first), str(second)]
    assert all(result.success for result in results)


def test_tokens_between_skips_dedents_at_span_start():
    parsed = parse_source("if a:\n    if b:\n        c\nd = 1\n")
    d_token = next(tok for tok in parsed.tokens if tok.text == "d")
    dedents = [tok for tok in parsed.tokens if tok.text == "DEDENT"]
    assert len(dedents) == 2
    assert all(tok.start == tok.end == d_token.start for tok in dedents)
    selected = parsed.tokens_between(d_token.start, len(parsed.source))
    assert [tok.text for tok in selected] == ["d", "=", "1", "NEWLINE"]
