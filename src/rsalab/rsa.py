"""Provides the textbook RSA cipher over single integer blocks, along with key containers.

Facilitates "textbook" RSA only: a block is an integer, encoding is a single modular exponentiation with the public
half and decoding the same with the private half. No padding is applied. Irregular inputs are reported through
`RuntimeWarning` and the computation goes ahead regardless.

Typical usage example:

    pair = KeyPair.generate(1024)
    c = pair.public.encode(1230948092384098)
    r = pair.private.decode(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random
from typing import Iterable, NamedTuple
import warnings

from rsalab import keygen
from rsalab.arith import mod_pow


class RSAKey:
    """The overall RSA key half implementation.

    Holds the two components every key half has, whether public or private. Values are fixed at construction.

    Attributes:
        expo: The exponent of the key, whether private or public.
        mod: The modulus of the keypair.
    """

    __slots__ = ("_expo", "_mod")

    def __init__(self, expo: int, mod: int) -> None:
        self._expo = expo
        self._mod = mod

    @property
    def expo(self) -> int:
        return self._expo

    @property
    def mod(self) -> int:
        return self._mod

    def as_tuple(self) -> tuple[int, int]:
        return self._expo, self._mod

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encode/Decode).

        Args:
            message: The integer block to transform.

        Returns:
            The transformed block.
        """
        return mod_pow(message, self._expo, self._mod)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RSAKey):
            return NotImplemented
        return type(self) is type(other) and self.as_tuple() == other.as_tuple()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self.as_tuple())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(expo={self._expo}, mod={self._mod})"


class RSAPubKey(RSAKey):
    """Public half (e, n)."""

    __slots__ = ()

    def encode(self, message: int) -> int:
        """Use the public key to encode a block.

        A block not below the modulus is still encoded, but it will come back reduced modulo n on decode.

        Args:
            message: The block to encode.

        Returns:
            The ciphertext block.
        """
        if message >= self.mod:
            warnings.warn("Block is too large for the modulus, it will not survive a round trip.", RuntimeWarning)
        return self.c_rsa(message)


class RSAPrivKey(RSAKey):
    """Private half (d, n)."""

    __slots__ = ()

    def decode(self, ciphertext: int) -> int:
        """Decodes a block using the private key."""
        return self.c_rsa(ciphertext)


class KeyPair(NamedTuple):
    """Public and private halves over one shared modulus."""
    public: RSAPubKey
    private: RSAPrivKey

    @classmethod
    def from_primes(cls,
                    p: int,
                    q: int,
                    bit_count: int,
                    rng: random.Random | None = None,
                    *,
                    witnesses: Iterable[int] = keygen.DEFAULT_WITNESSES,
                    max_attempts: int | None = None,
                    literal_sampling: bool = False) -> "KeyPair":
        """Derives a key pair from two known primes.

        Args:
            p: First prime.
            q: Second prime.
            bit_count: Bit size of the primes, bounds the public exponent size.
            rng: Random source for the public exponent search.
            witnesses: Bases for the primality test.
            max_attempts: Optional cap on generation loops.
            literal_sampling: Passed on to the public exponent search.

        Returns:
            The derived key pair.
        """
        (e, n), (d, _) = keygen.generate_key_pair(p,
                                                  q,
                                                  bit_count,
                                                  rng,
                                                  witnesses=witnesses,
                                                  max_attempts=max_attempts,
                                                  literal_sampling=literal_sampling)
        return cls(RSAPubKey(e, n), RSAPrivKey(d, n))

    @classmethod
    def generate(cls,
                 bit_count: int,
                 rng: random.Random | None = None,
                 *,
                 witnesses: Iterable[int] = keygen.DEFAULT_WITNESSES,
                 max_attempts: int | None = None,
                 literal_sampling: bool = False) -> "KeyPair":
        """Generates both primes of `bit_count` bits, then the key pair over them.

        Args:
            bit_count: Size of each prime in bits.
            rng: Random source for every search.
            witnesses: Bases for the primality test.
            max_attempts: Optional cap on generation loops.
            literal_sampling: Passed to `random_bits` as `literal` in every search, public exponent included.

        Returns:
            A fresh key pair.
        """
        opts = {"witnesses": tuple(witnesses), "max_attempts": max_attempts, "literal_sampling": literal_sampling}
        p = keygen.generate_prime(bit_count, rng, **opts)
        q = keygen.generate_prime(bit_count, rng, **opts)
        return cls.from_primes(p, q, bit_count, rng, **opts)


def integer_to_bits(value: int, bit_count: int) -> str:
    """Renders the low `bit_count` bits of `value`, most significant first.

    Args:
        value: The integer to render.
        bit_count: The number of characters to produce.

    Returns:
        A string of '0' and '1'.
    """
    return "".join("1" if (value >> i) & 1 else "0" for i in range(bit_count - 1, -1, -1))


def bits_to_integer(bits: str, bit_count: int) -> int:
    """Reads a bit string back into an integer.

    The last character is the least significant bit, and at most `bit_count` characters are read from the right.
    Anything but '0' counts as a set bit.

    Args:
        bits: The bit string.
        bit_count: The declared length of `bits`.

    Returns:
        The represented integer.
    """
    if len(bits) != bit_count:
        warnings.warn(f"Incorrect sizes: got {len(bits)} bits, expected {bit_count}.", RuntimeWarning)
    value = 0
    for i, ch in enumerate(reversed(bits[-bit_count:] if bit_count > 0 else "")):
        if ch != "0":
            value |= 1 << i
    return value
