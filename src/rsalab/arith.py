"""Integer arithmetic primitives shared by the primality test, key generation and the cipher.

Both routines work on plain Python integers, so there is no precision limit to worry about. They are written as loops
rather than recursion so that 2048-bit and larger operands do not depend on the interpreter's recursion limit.

Typical usage example:

    mod_pow(2, 10, 1000)
    x, y = ext_euclid(17, 3120)
    d = mod_inverse(17, 3120)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Binary modular exponentiation.

    Walks the exponent from its most significant bit down, squaring once per bit and multiplying by the base on set
    bits. Gives the same result as halving the exponent recursively.

    Args:
        base: The base.
        exponent: The exponent. Must be non-negative.
        modulus: The modulus. Must be > 1.

    Returns:
        `base ** exponent % modulus`, or 1 for a zero exponent.
    """
    result = 1
    for bit in range(exponent.bit_length() - 1, -1, -1):
        result = (result * result) % modulus
        if (exponent >> bit) & 1:
            result = (result * base) % modulus
    return result


def ext_euclid(a: int, b: int) -> tuple[int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = gcd(a, b). The coefficients are those of the textbook recursion with base case
    `a == 0 -> (0, 1)`: quotients are collected on the way down and substituted back on the way up.

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        The Bezout coefficients (x, y).
    """
    quotients = []
    while a != 0:
        quotients.append(b // a)
        a, b = b % a, a
    x, y = 0, 1
    for quot in reversed(quotients):
        x, y = y - quot * x, x
    return x, y


def mod_inverse(a: int, m: int) -> int:
    """Bezout coefficient of `a` normalized into [0, m).

    Only a true inverse when gcd(a, m) == 1, which is not checked here.
    """
    return ext_euclid(a, m)[0] % m
