"""Lehmer codes: bijection between permutations of n elements and [0, n!)."""

from math import factorial
from typing import List, Sequence


def encode(perm: Sequence[int]) -> int:
    n = len(perm)
    code = 0
    for i in range(n):
        smaller = 0
        for j in range(i + 1, n):
            if perm[j] < perm[i]:
                smaller += 1
        code = code * (n - i) + smaller
    return code


def decode(code: int, n: int) -> List[int]:
    if not 0 <= code < factorial(n):
        raise ValueError(f"Lehmer code {code} out of range for n={n}")
    numbers = list(range(n))
    perm = []
    for i in range(n):
        fact = factorial(n - 1 - i)
        digit, code = divmod(code, fact)
        perm.append(numbers.pop(digit))
    return perm
