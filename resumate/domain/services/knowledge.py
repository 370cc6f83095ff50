"""Knowledge merge - accumulate learned facts without duplicates."""

from collections.abc import Iterable


def merge_facts(existing: Iterable[str], new: Iterable[str]) -> list[str]:
    """Return existing facts in order, followed by new facts not seen yet.

    Comparison is exact string equality. Duplicates inside either input are
    collapsed to their first occurrence, so the result never repeats a fact
    and always contains every distinct existing fact.
    """
    merged: list[str] = []
    seen: set[str] = set()
    for fact in (*existing, *new):
        if fact in seen:
            continue
        seen.add(fact)
        merged.append(fact)
    return merged
