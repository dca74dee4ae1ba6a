"""Textbook RSA in an Academic Sense.

Provides probable-prime generation, exponent pair derivation and single-block encode/decode, all built on a small
integer-arithmetic core (binary modular exponentiation and the extended Euclidean algorithm). No padding, no key
storage. Not for protecting anything.

Typical usage example:

    p, q = generate_prime(1024), generate_prime(1024)
    pair = KeyPair.from_primes(p, q, 1024)
    c = pair.public.encode(1230948092384098)
    r = pair.private.decode(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsalab.arith import ext_euclid
from rsalab.arith import mod_inverse
from rsalab.arith import mod_pow
from rsalab.keygen import check_prime
from rsalab.keygen import generate_key_pair
from rsalab.keygen import generate_prime
from rsalab.keygen import random_bits
from rsalab.rsa import bits_to_integer
from rsalab.rsa import integer_to_bits
from rsalab.rsa import KeyPair
from rsalab.rsa import RSAPrivKey
from rsalab.rsa import RSAPubKey

__version__ = "0.1.0"
__all__ = [
    "KeyPair",
    "RSAPrivKey",
    "RSAPubKey",
    "bits_to_integer",
    "check_prime",
    "ext_euclid",
    "generate_key_pair",
    "generate_prime",
    "integer_to_bits",
    "mod_inverse",
    "mod_pow",
    "random_bits",
]
