from __future__ import annotations

import tokenize


def preview_lines(path: str, start_line: int, end_line: int, max_lines: int) -> list[str]:
    """Up to ``max_lines`` trimmed, non-blank lines from ``[start_line, end_line]``.

    The file is decoded the way the parser decodes it, honoring PEP 263
    encoding declarations.
    """
    if max_lines <= 0 or start_line <= 0 or end_line < start_line:
        return []
    lines: list[str] = []
    try:
        with tokenize.open(path) as handle:
            for number, line in enumerate(handle, start=1):
                if number < start_line:
                    continue
                if number > end_line:
                    break
                trimmed = line.strip()
                if not trimmed:
                    continue
                lines.append(trimmed)
                if len(lines) >= max_lines:
                    break
    except (OSError, SyntaxError, UnicodeDecodeError):
        # SyntaxError: unknown encoding declaration.
        return []
    return lines
