from collections import Counter

from lexical_types import LexemeStat, TokenKind


def compute_lexeme_stats(tokens):
    """
    Count visible tokens per kind.

    ERROR tokens (and any whitespace or comment that slips through) count
    neither as a kind nor towards the total. Kinds are ordered by count,
    ties keep the order in which the kind first appeared.
    """
    counts = Counter(
        t.kind for t in tokens
        if t.kind is not TokenKind.ERROR and not t.kind.is_internal
    )
    total = sum(counts.values())
    if total == 0:
        return []

    stats = [LexemeStat(kind, count, count / total) for kind, count in counts.items()]
    # sorted() is stable and Counter keeps first-seen order
    return sorted(stats, key=lambda s: s.count, reverse=True)
