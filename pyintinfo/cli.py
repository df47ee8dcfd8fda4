#!/usr/bin/env python
# -*- coding: utf-8 -*-

import argparse
import importlib.metadata
import logging
import sys

import colorama
import numpy as np
from colorama import Fore, Style

from pyintinfo.base import NATIVE_BITS
from pyintinfo.bitint import Integer, IntegerOptions
from pyintinfo.parse import identify_radix, parse

MAX_BITS = NATIVE_BITS

DESCRIPTION = '''
Inspect an integer in decimal, binary, octal and hexadecimal, at an explicit bit width.

The input is assumed to be a decimal integer unless it starts with 0b (binary),
0o or 0O (octal), 0x (hex), or a radix flag is set. The default bit size is the
minimum number of bits required to represent the input, and the integer is treated
as unsigned unless it is negative or --signed is given.
'''


def package_version():
    '''
    Installed version of the package, from its distribution metadata.
    '''
    try:
        return importlib.metadata.version('pyintinfo')
    except importlib.metadata.PackageNotFoundError:
        # running from a source checkout
        return 'unknown'


def build_parser():
    parser = argparse.ArgumentParser(
        prog='intinfo',
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('input', help="The integer to inspect")
    parser.add_argument('-s', '--signed', action='store_true', help="Treat the input as a signed integer")

    width = parser.add_mutually_exclusive_group()
    width.add_argument('-B', '--byte', '--u8', '--char', action='store_true', help="Treat the input as an 8-bit integer")
    width.add_argument('-S', '--short', '--u16', action='store_true', help="Treat the input as a 16-bit integer")
    width.add_argument('-i', '--int', '--u32', action='store_true', help="Treat the input as a 32-bit integer")
    width.add_argument('-l', '--long', '--u64', action='store_true', help="Treat the input as a 64-bit integer")
    width.add_argument('--bytes', type=int, help="Treat the input as an integer of the specified bytes")
    width.add_argument('-b', '--bits', type=int, help="Treat the input as an integer of the specified bits")

    extend = parser.add_mutually_exclusive_group()
    extend.add_argument(
        '-e', '--sign-extend', '--sext', action='store_true',
        help="Sign-extend the input when converting it to a bigger size (default if signed)",
    )
    extend.add_argument(
        '--zero-extend', '--zext', action='store_true',
        help="Zero-extend the input when converting it to a bigger size (default if unsigned)",
    )

    radix = parser.add_mutually_exclusive_group()
    radix.add_argument('-n', '--binary', '--bin', action='store_true', help="Treat the input as a binary integer")
    radix.add_argument('-o', '--octal', '--oct', action='store_true', help="Treat the input as an octal integer")
    radix.add_argument('-d', '--decimal', '--dec', action='store_true', help="Treat the input as a decimal integer")
    radix.add_argument('-x', '--hexadecimal', '--hex', action='store_true', help="Treat the input as a hex integer")
    radix.add_argument('-r', '--radix', type=int, help="Treat the input as an integer of the specified radix")

    parser.add_argument(
        '-t', '--twos-complement', '--two', action='store_true',
        help="Show information about the two's complement of the input as well",
    )
    parser.add_argument('-v', '--verbose', action='store_true', help="Log debug output to stderr")
    parser.add_argument('--version', action='version', version=f"%(prog)s {package_version()}")
    return parser


def total_bits(args):
    '''
    Number of bits requested on the command line, or None.
    '''
    if args.bits is not None:
        return args.bits
    elif args.bytes is not None:
        return args.bytes * 8
    elif args.byte:
        return 8
    elif args.short:
        return 16
    elif args.int:
        return 32
    elif args.long:
        return 64
    return None


def selected_radix(args):
    '''
    Radix requested on the command line, or None.
    '''
    if args.radix is not None:
        return args.radix
    elif args.binary:
        return 2
    elif args.octal:
        return 8
    elif args.decimal:
        return 10
    elif args.hexadecimal:
        return 16
    return None


def print_integer_info(integer):
    print(f"Decimal         =>  {Fore.BLUE}{integer}{Style.RESET_ALL}")
    print(f"Binary          =>  {Fore.YELLOW}0b{Style.RESET_ALL}{Fore.BLUE}{integer:b}{Style.RESET_ALL}")
    print(f"Octal           =>  {Fore.GREEN}0o{Style.RESET_ALL}{Fore.BLUE}{integer:o}{Style.RESET_ALL}")
    print(f"Hexadecimal     =>  {Fore.MAGENTA}0x{Style.RESET_ALL}{Fore.BLUE}{integer:x}{Style.RESET_ALL}")


def run(args):
    radix = selected_radix(args)
    if radix is None:
        radix = identify_radix(args.input) or 10

    requested_bits = args.bits if args.bits is not None else (args.bytes or 0) * 8
    if requested_bits > MAX_BITS:
        raise ValueError(f"number of bits must be less than or equal to {MAX_BITS}")

    is_negative = args.input.startswith('-')
    if is_negative:
        num, _ = parse(args.input, radix, signed=True)
        num &= 2 ** NATIVE_BITS - 1
        # 64 - leading ones of the 64-bit pattern + 1, so -0 needs 65 bits
        sig_bits = (~num & (2 ** NATIVE_BITS - 1)).bit_length() + 1
    else:
        num, sig_bits = parse(args.input, radix)
    if sig_bits is None:
        sig_bits = num.bit_length()

    bit_size = total_bits(args)
    if bit_size is None:
        bit_size = max(sig_bits, 1)
    signed = args.signed or is_negative
    sign_extend = not args.zero_extend and (args.sign_extend or signed)
    logging.debug(f"Inspecting {args.input} in radix {radix} as a {bit_size}-bit integer.")

    integer = Integer(
        np.uint64(num),
        IntegerOptions(signed=signed, size=bit_size, significant_bits=sig_bits, sign_extend=sign_extend),
    )

    print_integer_info(integer)
    print(f"\nBits: {Style.BRIGHT}{Fore.CYAN}{integer.bits()}{Style.RESET_ALL}")

    if args.twos_complement:
        integer.make_twos_complement()
        print(f"\n{Style.BRIGHT}{Fore.LIGHTCYAN_EX}2's Complement \\{Style.RESET_ALL}")
        print_integer_info(integer)


def main(argv=None):
    '''
    Entry point of the intinfo command. Returns the process exit status.
    '''
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    colorama.just_fix_windows_console()
    try:
        run(args)
    except ValueError as e:
        print(f"{Style.BRIGHT}{Fore.RED}error{Style.RESET_ALL}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
