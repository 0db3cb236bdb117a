"""Weighted category draw shared by wheel and slots."""


def weighted_pick(r: float, weights: list[float]) -> int:
    """Index chosen by cumulative-weight search.

    Scale r by the total weight, subtract each category's weight in turn,
    and stop at the first category that drives the remainder negative.
    """
    remaining = r * sum(weights)
    for i, w in enumerate(weights):
        remaining -= w
        if remaining < 0:
            return i
    # r × total rounded up onto the boundary; the last non-empty category owns it
    return max(i for i, w in enumerate(weights) if w > 0)


def weighted_probabilities(weights: list[float]) -> list[float]:
    total = sum(weights)
    return [w / total for w in weights]
