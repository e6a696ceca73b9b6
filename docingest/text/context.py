"""Bounded, non-redundant context windows built from scored passages."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from docingest.text.selection import DEFAULT_K, DEFAULT_LAMBDA, Vector, select


@dataclass(frozen=True)
class Passage:
    """A retrievable piece of text with its precomputed embedding."""

    text: str
    vector: Sequence[float] = field(default_factory=tuple)


def build_context(
    query: Vector,
    passages: Sequence[Passage],
    k: int = DEFAULT_K,
    lambda_mult: float = DEFAULT_LAMBDA,
    max_chars: int | None = None,
) -> list[Passage]:
    """Pick diverse passages for ``query`` and pack them into ``max_chars``.

    Passages keep MMR selection order. Packing stops at the first selected
    passage that would overflow the budget. Separators added by
    ``render_context`` are not counted.
    """
    indices = select(query, [p.vector for p in passages], k=k, lambda_mult=lambda_mult)
    chosen: list[Passage] = []
    used = 0
    for index in indices:
        passage = passages[index]
        if max_chars is not None and used + len(passage.text) > max_chars:
            break
        chosen.append(passage)
        used += len(passage.text)
    return chosen


def render_context(passages: Sequence[Passage], separator: str = "\n\n") -> str:
    return separator.join(p.text for p in passages)
