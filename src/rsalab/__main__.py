"""The Command Line Interface for the utility.

Runs the classic lab demonstration by default: two fresh primes, a derived key pair printed in decimal, and one
encode/decode round trip of a fixed block. Subcommands expose the individual steps. Diagnostics are printed to stderr
as warnings and never change the exit status.

Typical usage example:

    rsalab
    OR
    python -m rsalab demo --bits 512 --seed 7 --timing
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import random
import time
import typing

import rsalab
from rsalab.keygen import DEFAULT_WITNESSES

DEMO_BITS: int = 1024
DEMO_MESSAGE: int = 1230948092384098


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "demo":
        HelpData("Generate a key pair and run one encode/decode round trip. (Default)"),
    "keygen":
        HelpData("Generate and print a key pair."),
    "prime":
        HelpData("Generate and print a single probable prime."),
    "encode":
        HelpData("Encode a block with a public key half."),
    "decode":
        HelpData("Decode a block with a private key half."),
    "bits":
        HelpData("Convert between integers and bit strings."),
    "bit_count":
        HelpData(description="Size of each prime (in bits).", format=int, default=DEMO_BITS),
    "message":
        HelpData(description="The block, as a decimal integer.", format=int, default=DEMO_MESSAGE),
    "exponent":
        HelpData(description="Exponent of the key half.", format=int),
    "modulus":
        HelpData(description="Modulus of the key half.", format=int),
    "witness":
        HelpData(description="Witness base for the primality test. Repeat for more bases.", format=int),
    "max_attempts":
        HelpData(description="Cap on generation loops. Unbounded if omitted.", format=int),
    "seed":
        HelpData(description="Seed for a reproducible random source.", format=int),
    "value":
        HelpData(description="Integer to render, or bit string to read with --parse.", format=str),
    "width":
        HelpData(description="Bit string length.", format=int),
}

gen = argparse.ArgumentParser(add_help=False)
gen.add_argument("--bits",
                 "-b",
                 dest="bit_count",
                 type=help_dict["bit_count"].format,
                 default=help_dict["bit_count"].default,
                 help=help_dict["bit_count"].description)
gen.add_argument("--witness",
                 "-w",
                 action="append",
                 type=help_dict["witness"].format,
                 help=help_dict["witness"].description)
gen.add_argument("--max-attempts", type=help_dict["max_attempts"].format, help=help_dict["max_attempts"].description)
gen.add_argument("--seed", "-s", type=help_dict["seed"].format, help=help_dict["seed"].description)
gen.add_argument("--literal-sampling",
                 action="store_true",
                 help="Set candidate bits on a 0 coin instead of a 1. Applies to every search.")
gen.add_argument("--timing", "-t", action="store_true", help="Report how long generation took.")
keyhalf = argparse.ArgumentParser(add_help=False)
keyhalf.add_argument("--exponent",
                     "-e",
                     type=help_dict["exponent"].format,
                     required=True,
                     help=help_dict["exponent"].description)
keyhalf.add_argument("--modulus",
                     "-m",
                     type=help_dict["modulus"].format,
                     required=True,
                     help=help_dict["modulus"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message",
                      type=help_dict["message"].format,
                      default=help_dict["message"].default,
                      help=help_dict["message"].description)
corep = argparse.ArgumentParser(prog="rsalab")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsalab.__version__}")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

commands.add_parser("demo", parents=[gen, payloads], help=help_dict["demo"].description)
commands.add_parser("keygen", parents=[gen], help=help_dict["keygen"].description)
commands.add_parser("prime", parents=[gen], help=help_dict["prime"].description)
commands.add_parser("encode", parents=[keyhalf, payloads], help=help_dict["encode"].description)
commands.add_parser("decode", parents=[keyhalf, payloads], help=help_dict["decode"].description)
bits = commands.add_parser("bits", help=help_dict["bits"].description)
bits.add_argument("--value", type=help_dict["value"].format, required=True, help=help_dict["value"].description)
bits.add_argument("--width", type=help_dict["width"].format, required=True, help=help_dict["width"].description)
bits.add_argument("--parse", "-p", action="store_true", help="Read a bit string instead of rendering an integer.")


def timed(function: typing.Callable, enabled: bool = True) -> typing.Any:
    """Run `function`, printing its wall time when `enabled`."""
    start = time.perf_counter()
    result = function()
    if enabled:
        print(f"function took: {(time.perf_counter() - start) * 1000:.6f} ms")
    return result


def print_keys(pair: rsalab.KeyPair) -> None:
    print("Public key:")
    print(pair.public.expo)
    print(pair.public.mod)
    print("Private key:")
    print(pair.private.expo)
    print(pair.private.mod)


def main(argv: list[str] | None = None) -> None:
    """Core Command Line Interface."""
    args = corep.parse_args(argv)
    if not args.subcommand:
        args = corep.parse_args(["demo"])
    opts = {}
    rng = None
    if hasattr(args, "bit_count"):
        opts = {
            "witnesses": tuple(args.witness) if args.witness else DEFAULT_WITNESSES,
            "max_attempts": args.max_attempts,
            "literal_sampling": args.literal_sampling,
        }
        rng = random.Random(args.seed) if args.seed is not None else None
    try:
        match args.subcommand:
            case "demo" | "keygen":
                pair = timed(lambda: rsalab.KeyPair.generate(args.bit_count, rng, **opts), args.timing)
                print_keys(pair)
                if args.subcommand == "keygen":
                    return
                encrypted = pair.public.encode(args.message)
                decrypted = pair.private.decode(encrypted)
                print(f"\nMessage: {args.message}")
                print(f"Encrypted: {encrypted}")
                print(f"Decrypted: {decrypted}")
            case "prime":
                print(timed(lambda: rsalab.generate_prime(args.bit_count, rng, **opts), args.timing))
            case "encode":
                print(rsalab.RSAPubKey(args.exponent, args.modulus).encode(args.message))
            case "decode":
                print(rsalab.RSAPrivKey(args.exponent, args.modulus).decode(args.message))
            case "bits":
                if args.parse:
                    print(rsalab.bits_to_integer(args.value, args.width))
                else:
                    print(rsalab.integer_to_bits(int(args.value), args.width))
    except (ValueError, RuntimeError) as err:
        corep.error(str(err))


if __name__ == "__main__":
    main()
