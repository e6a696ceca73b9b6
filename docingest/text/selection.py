"""Maximal Marginal Relevance selection over caller-supplied vectors."""

import math
from collections.abc import Sequence

DEFAULT_K = 12
DEFAULT_LAMBDA = 0.7

_EPSILON = 1e-8

Vector = Sequence[float]


def cosine(a: Vector, b: Vector) -> float:
    """Cosine similarity over the shared-length prefix of two vectors.

    Vectors of different length are compared over the shorter length. The
    epsilon in the denominator makes zero vectors score 0 instead of failing.
    """
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    return dot / (math.sqrt(norm_a) * math.sqrt(norm_b) + _EPSILON)


def select(
    query: Vector,
    candidates: Sequence[Vector],
    k: int = DEFAULT_K,
    lambda_mult: float = DEFAULT_LAMBDA,
) -> list[int]:
    """Greedily pick up to ``k`` candidate indices balancing relevance and novelty.

    Each round scores every remaining candidate as
    ``lambda_mult * cosine(query, c) - (1 - lambda_mult) * max_sim_to_selected``
    and takes the first candidate with the strictly highest score. The result
    is in selection order. ``lambda_mult`` is not range-checked.
    """
    selected: list[int] = []
    pool = list(range(len(candidates)))
    relevance = [cosine(query, candidate) for candidate in candidates]

    while len(selected) < k and pool:
        best_index = pool[0]
        best_score = -math.inf
        for i in pool:
            diversity = 0.0
            for j in selected:
                diversity = max(diversity, cosine(candidates[i], candidates[j]))
            score = lambda_mult * relevance[i] - (1 - lambda_mult) * diversity
            if score > best_score:
                best_index = i
                best_score = score
        selected.append(best_index)
        pool.remove(best_index)

    return selected
