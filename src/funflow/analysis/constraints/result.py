"""Deterministic snapshot of a finished analysis."""

import numbers

__all__ = ["formatAnalysis", "entryOrder"]


def entryOrder(entry):
    # Numeric discriminators (expression labels) sort before strings.
    key = entry.key
    if isinstance(key, numbers.Number):
        return (0, key, "")
    return (1, 0, str(key))


def formatAnalysis(entries):
    """
    Snapshot the data of every entry.

    Args:
        entries: Iterable of Entry.

    Returns:
        A dict from entry display name (e.g. "C(3)", "p(x#2)") to the list of
        its values in first-insertion order. Keys are ordered by discriminator:
        expression labels ascending, then binding names lexicographically.
    """
    return {entry.name: list(entry.data) for entry in sorted(entries, key=entryOrder)}
