from __future__ import annotations

from collections.abc import Sequence

_NGRAM_SEPARATOR = "\x1f"


def jaccard_ngram_similarity(
    tokens_a: Sequence[str], tokens_b: Sequence[str], n: int = 3
) -> float:
    """Jaccard similarity of the token n-gram sets of two sequences.

    Two sequences too short to form any n-gram are considered identical.
    Exact grouping does not use this; it is kept for near-duplicate analysis.
    """
    if n <= 0:
        raise ValueError("n must be > 0")
    grams_a = _ngrams(tokens_a, n)
    grams_b = _ngrams(tokens_b, n)
    if not grams_a and not grams_b:
        return 1.0
    intersection = len(grams_a & grams_b)
    union = len(grams_a | grams_b)
    if union == 0:
        return 0.0
    return intersection / union


def _ngrams(tokens: Sequence[str], n: int) -> set[str]:
    if len(tokens) < n:
        return set()
    return {_NGRAM_SEPARATOR.join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)}
