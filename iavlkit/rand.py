"""Seedable pseudo-random helpers, not suitable for cryptographic use."""

from __future__ import annotations

import os
import random
import threading

STR_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def _os_seed() -> int:
    return int.from_bytes(os.urandom(8), "big")


class Rand:
    """A thread-safe PRNG seeded from OS randomness unless a seed is given."""

    def __init__(self, seed: int | None = None) -> None:
        self._lock = threading.Lock()
        self._rng = random.Random()
        self.seed(_os_seed() if seed is None else seed)

    def seed(self, seed: int) -> None:
        """Reset the generator to the given seed."""
        with self._lock:
            self._rng.seed(seed)

    def random_str(self, length: int) -> str:
        """Return a random alphanumeric string of the given length."""
        chars: list[str] = []
        while len(chars) < length:
            val = self.int63()
            for _ in range(10):
                v = val & 0x3F
                val >>= 6
                if v >= len(STR_CHARS):
                    continue
                chars.append(STR_CHARS[v])
                if len(chars) == length:
                    break
        return "".join(chars)

    def random_bytes(self, n: int) -> bytes:
        """Return ``n`` bytes from the internal generator."""
        with self._lock:
            return self._rng.randbytes(n)

    def int(self) -> int:
        """Return a non-negative 63-bit integer."""
        return self.int63()

    def int31(self) -> int:
        """Return a non-negative 31-bit integer."""
        with self._lock:
            return self._rng.getrandbits(31)

    def int63(self) -> int:
        """Return a non-negative 63-bit integer."""
        with self._lock:
            return self._rng.getrandbits(63)

    def intn(self, n: int) -> int:
        """Return a uniform integer in ``[0, n)``; ``n`` must be positive."""
        if n <= 0:
            raise ValueError("invalid argument to intn")
        with self._lock:
            return self._rng.randrange(n)

    def float64(self) -> float:
        """Return a float in ``[0.0, 1.0)``."""
        with self._lock:
            return self._rng.random()

    def bool(self) -> bool:
        """Return a uniformly random boolean."""
        return self.int63() % 2 == 0

    def perm(self, n: int) -> list[int]:
        """Return a random permutation of ``range(n)``."""
        if n < 0:
            raise ValueError("invalid argument to perm")
        values = list(range(n))
        with self._lock:
            self._rng.shuffle(values)
        return values


_global = Rand()


def seed(value: int) -> None:
    """Reseed the shared generator."""
    _global.seed(value)


def rand_str(length: int) -> str:
    """Random alphanumeric string from the shared generator."""
    return _global.random_str(length)


def rand_int() -> int:
    """Non-negative random integer from the shared generator."""
    return _global.int()


def rand_int31() -> int:
    """Non-negative 31-bit random integer from the shared generator."""
    return _global.int31()


def rand_bytes(n: int) -> bytes:
    """Random bytes from the shared generator."""
    return _global.random_bytes(n)


def rand_perm(n: int) -> list[int]:
    """Random permutation of ``range(n)`` from the shared generator."""
    return _global.perm(n)