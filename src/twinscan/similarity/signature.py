from __future__ import annotations

import hashlib
from collections.abc import Iterable

from twinscan.core.types import HashedCandidate, NormalizedCandidate
from twinscan.snippets.normalization import join_tokens

# Unit separator: cannot occur inside a Python token.
TOKEN_SEPARATOR = "\x1f"


def token_digest(tokens: Iterable[str]) -> str:
    """Lowercase hex SHA-256 of ``tokens`` joined on ``TOKEN_SEPARATOR``."""
    return hashlib.sha256(join_tokens(tokens, TOKEN_SEPARATOR).encode("utf-8")).hexdigest()


def compute_signature(normalized: NormalizedCandidate) -> HashedCandidate:
    return HashedCandidate(
        normalized=normalized,
        signature=token_digest(normalized.tokens),
        token_count=normalized.token_count,
    )


def compute_signatures(items: Iterable[NormalizedCandidate]) -> list[HashedCandidate]:
    return [compute_signature(item) for item in items]
