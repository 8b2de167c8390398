# shorsim/modarith.py
# Exact big-integer arithmetic for the Shor pipeline
# - Euclidean gcd
# - Binary (square-and-multiply) modular exponentiation
# - Deterministic Miller–Rabin screen for front ends

from __future__ import annotations

# ---------- gcd ----------

def gcd(x: int, y: int) -> int:
    """Greatest common divisor by Euclid; gcd(x, 0) == x."""
    if x < 0 or y < 0:
        raise ValueError("gcd expects non-negative integers")
    while y:
        x, y = y, x % y
    return x

# ---------- modular exponentiation ----------

def modpow(base: int, exponent: int, modulus: int) -> int:
    """
    base**exponent % modulus by right-to-left binary exponentiation.
    Each square / multiply is reduced mod `modulus`, so nothing grows past modulus**2.
    """
    if modulus < 1:
        raise ValueError("modulus must be >= 1")
    if exponent < 0:
        raise ValueError("exponent must be >= 0")
    if modulus == 1:
        return 0
    result = 1
    b = base % modulus
    e = exponent
    while e:
        if e & 1:
            result = (result * b) % modulus
        b = (b * b) % modulus
        e >>= 1
    return result

# ---------- primality (front-end screening only) ----------

_SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37]
_MR_BASES = [2, 325, 9375, 28178, 450775, 9780504, 1795265022]  # exact below 2**64

def _strong_probable_prime(n: int, a: int, d: int, s: int) -> bool:
    x = modpow(a, d, n)
    if x == 1 or x == n - 1:
        return True
    for _ in range(s - 1):
        x = (x * x) % n
        if x == n - 1:
            return True
    return False

def is_probable_prime(n: int) -> bool:
    if n < 2: return False
    for p in _SMALL_PRIMES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2; s += 1
    for a in _MR_BASES:
        a %= n
        if a == 0:
            continue
        if not _strong_probable_prime(n, a, d, s):
            return False
    return True
