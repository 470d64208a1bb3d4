from __future__ import annotations

from collections.abc import Iterable

from twinscan.core.types import Candidate, NormalizedCandidate, TokenCategory

NUMBER_TOKEN = "NUM"
STRING_TOKEN = "STR"
CHAR_TOKEN = "CHR"

_LITERAL_TOKENS = {
    TokenCategory.NUMERIC: NUMBER_TOKEN,
    TokenCategory.STRING: STRING_TOKEN,
    TokenCategory.CHARACTER: CHAR_TOKEN,
}


def normalize_candidate(candidate: Candidate) -> NormalizedCandidate:
    """Canonicalize a candidate's token stream.

    Identifiers become ``ID1``, ``ID2``, ... in order of first appearance, with
    repeated names reusing their placeholder; literals collapse to one token
    per category. Keywords, operators and layout tokens pass through as-is.
    """
    identifiers: dict[str, str] = {}
    tokens: list[str] = []
    for token in candidate.tokens:
        if token.category is TokenCategory.IDENTIFIER:
            placeholder = identifiers.get(token.text)
            if placeholder is None:
                placeholder = f"ID{len(identifiers) + 1}"
                identifiers[token.text] = placeholder
            tokens.append(placeholder)
            continue
        literal = _LITERAL_TOKENS.get(token.category)
        tokens.append(literal if literal is not None else token.text)
    return NormalizedCandidate(candidate=candidate, tokens=tuple(tokens), token_count=len(tokens))


def normalize_candidates(candidates: Iterable[Candidate]) -> list[NormalizedCandidate]:
    return [normalize_candidate(candidate) for candidate in candidates]


def join_tokens(tokens: Iterable[str], separator: str = " ") -> str:
    return separator.join(tokens)
