"""Fisher-Yates shuffle driven by uniform floats.

For i from n-1 down to 1, swap element i with floor(r_i × (i+1)).
Exactly n-1 draws are consumed; the last element has no choice.
"""


def shuffle_draws(n: int) -> int:
    return max(0, n - 1)


def fisher_yates(items: list, stream) -> list:
    """Return a shuffled copy of `items`, pulling one float per swap."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(stream.next() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


def permutation(n: int, stream) -> list[int]:
    return fisher_yates(list(range(n)), stream)
