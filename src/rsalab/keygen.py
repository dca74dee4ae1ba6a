"""Core Key Generation Utility, mainly focusing on the generation of random probable primes.

Implements the "lab" flavor of RSA key generation: candidates are filtered by trial division against a short fixed
list of small primes, then checked with a Miller-Rabin style witness test using the single base 2 unless told
otherwise. The public exponent is itself a freshly generated small prime, retried until its Bezout coefficient
against the totient comes out non-negative.

All randomness flows through an injectable `random.Random` compatible source. Without one, each prime search seeds
its own `secrets.SystemRandom`.

Typical usage example:

    p = generate_prime(1024)
    q = generate_prime(1024)
    (e, n), (d, _) = generate_key_pair(p, q, 1024)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools
import random
import secrets
from typing import Iterable
import warnings

from rsalab.arith import ext_euclid
from rsalab.arith import mod_pow

SMALL_PRIMES: tuple[int, ...] = (3, 5, 7, 11, 13, 17, 19, 23, 29, 31)
DEFAULT_WITNESSES: tuple[int, ...] = (2,)
PUBLIC_EXPONENT_FILTER: int = 2**16 + 1
MAX_PUBLIC_EXPONENT_BITS: int = 32
_MIN_PRIME_BITS: int = 6


def _check_witnesses(witnesses: Iterable[int]) -> tuple[int, ...]:
    witnesses = tuple(witnesses)
    if not witnesses:
        raise ValueError("At least one witness base is required.")
    for witness in witnesses:
        if witness < 2:
            raise ValueError(f"Witness bases must be at least 2, got {witness}.")
    return witnesses


def _trial_division(value: int) -> bool:
    """Check the provided `value` against the fixed small primes.

    Runs a fast pre-check before the witness test. The small primes themselves are rejected as well, generated
    candidates are always far larger than them.

    Args:
         value: The number to check.

    Returns:
        False if `value` is even or has a factor in `SMALL_PRIMES`, True otherwise.
    """
    if value % 2 == 0:
        return False
    for prime in SMALL_PRIMES:
        if value % prime == 0:
            return False
    return True


def _witness_test(value: int, witness: int) -> bool:
    """Perform a single Miller-Rabin round with a fixed witness.

    The base is taken modulo `value`. Reduced bases of 0, 1 and `value - 1` prove nothing and pass.

    Args:
        value: Odd integer > 2 to be tested.
        witness: The base to test against.

    Returns:
        True if `witness` does not prove `value` composite, False otherwise.
    """
    tw = value - 1
    witness %= value
    if witness in (0, 1, tw):
        return True
    power = (tw & -tw).bit_length() - 1
    q = tw >> power
    surplus = mod_pow(witness, q, value)
    if surplus == 1 or surplus == tw:
        return True
    for _ in range(1, power):
        surplus = (surplus * surplus) % value
        if surplus == tw:
            return True
    return False


def check_prime(value: int, witnesses: Iterable[int] = DEFAULT_WITNESSES) -> bool:
    """Performs a composite Primality test, trial division first, then one witness round per base.

    With the default single base 2 this is deterministic and accepts base-2 strong pseudoprimes such as
    4033 = 37 * 109. Pass more bases for a stronger check.

    Args:
        value: The candidate prime to test.
        witnesses: Bases for the witness rounds. Defaults to `(2,)`.

    Returns:
        True if `value` is probably prime, False otherwise.

    Raises:
        ValueError: If `witnesses` is empty or holds a base below 2.
    """
    witnesses = _check_witnesses(witnesses)
    if value < 2:
        return False
    if not _trial_division(value):
        return False
    return all(_witness_test(value, witness) for witness in witnesses)


def random_bits(bit_count: int, rng: random.Random, literal: bool = False) -> int:
    """Draw a `bit_count` bit value one fair coin at a time.

    Args:
        bit_count: Number of bit positions to fill.
        rng: Random source, only `getrandbits` is used.
        literal: If True, set a bit when the coin comes up 0 instead of 1. Both mappings are uniform.

    Returns:
        An integer in `[0, 2**bit_count)`.
    """
    hit = 0 if literal else 1
    value = 0
    for i in range(bit_count):
        if rng.getrandbits(1) == hit:
            value |= 1 << i
    return value


def _attempts(max_attempts: int | None) -> Iterable[int]:
    if max_attempts is None:
        return itertools.count()
    return range(max_attempts)


def generate_prime(bit_count: int,
                   rng: random.Random | None = None,
                   *,
                   witnesses: Iterable[int] = DEFAULT_WITNESSES,
                   max_attempts: int | None = None,
                   literal_sampling: bool = False) -> int:
    """Generate a probable prime number of exactly `bit_count` bits.

    Every candidate gets its two top bits and its lowest bit forced on, then is dropped if it is 1 modulo 65537 or
    fails `check_prime`. Runs until a candidate survives unless `max_attempts` is given.

    Args:
        bit_count: The size of the prime to generate in bits. Must be at least 6.
        rng: Random source. A fresh `secrets.SystemRandom` is used if not provided.
        witnesses: Bases passed on to `check_prime`.
        max_attempts: Optional cap on the number of candidates drawn.
        literal_sampling: Passed to `random_bits` as `literal`.

    Returns:
        A probable prime number.

    Raises:
        ValueError: If `bit_count` is too small for any candidate to survive trial division, or the witness bases
            are empty or hold a base below 2.
        RuntimeError: If `max_attempts` candidates were drawn with no prime found.
    """
    if bit_count < _MIN_PRIME_BITS:
        raise ValueError(f"bit_count must be at least {_MIN_PRIME_BITS}.")
    witnesses = _check_witnesses(witnesses)
    if rng is None:
        rng = secrets.SystemRandom()
    # Two top bits fix the length, the low bit makes it odd.
    msk = (3 << (bit_count - 2)) | 1
    for _ in _attempts(max_attempts):
        candidate = random_bits(bit_count, rng, literal_sampling) | msk
        if candidate % PUBLIC_EXPONENT_FILTER != 1 and check_prime(candidate, witnesses):
            return candidate
    raise RuntimeError(f"Drew {max_attempts} candidates with no prime found.")


def generate_key_pair(p: int,
                      q: int,
                      bit_count: int,
                      rng: random.Random | None = None,
                      *,
                      witnesses: Iterable[int] = DEFAULT_WITNESSES,
                      max_attempts: int | None = None,
                      literal_sampling: bool = False) -> tuple[tuple[int, int], tuple[int, int]]:
    """Derives an RSA exponent pair over the modulus `p * q`.

    The public exponent is a random prime of `min(bit_count, 32)` bits. Its Bezout coefficient against the totient
    is taken as the private exponent, drawing a new public exponent until that coefficient is non-negative.
    gcd(e, totient) is not checked up front; the final `e * d % totient == 1` check only warns.

    Args:
        p: First prime.
        q: Second prime.
        bit_count: Bit size the primes were generated with.
        rng: Random source, passed on to `generate_prime`.
        witnesses: Bases passed on to `check_prime`.
        max_attempts: Optional cap on public exponent draws, also applied to each prime search.
        literal_sampling: Passed on to `generate_prime` for the public exponent search.

    Returns:
        A tuple of (public, private) sub-tuples (exponent, modulus).

    Raises:
        ValueError: If the witness bases are empty or hold a base below 2.
        RuntimeError: If `max_attempts` public exponents were drawn with none accepted.
    """
    n = p * q
    totient = (p - 1) * (q - 1)
    e_bits = min(bit_count, MAX_PUBLIC_EXPONENT_BITS)
    witnesses = _check_witnesses(witnesses)
    for _ in _attempts(max_attempts):
        e = generate_prime(e_bits,
                           rng,
                           witnesses=witnesses,
                           max_attempts=max_attempts,
                           literal_sampling=literal_sampling)
        d, _ = ext_euclid(e, totient)
        if d >= 0:
            break
    else:
        raise RuntimeError(f"Drew {max_attempts} public exponents with no usable inverse.")
    if (e * d) % totient != 1:
        warnings.warn("Incorrect exponents: e * d is not 1 modulo the totient.", RuntimeWarning)
    return (e, n), (d, n)
