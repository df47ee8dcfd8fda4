#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

from pyintinfo.base import NATIVE_BITS, RADIX_GROUP_BITS

'''
Parse integer literals from text, with the strictness of a fixed-width integer
parser: an optional sign, then digits of the radix and nothing else.
'''

DIGITS = '0123456789abcdefghijklmnopqrstuvwxyz'

PREFIXES = {
    2: '0b',
    8: '0o',
    16: '0x',
}


class ParseError(ValueError):
    '''
    Text is not a valid integer of the requested radix and signedness.
    '''
    pass


def trim_prefix(text, prefix):
    '''
    Strip every leading repetition of a prefix.
    '''
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def from_str_radix(text, radix, signed=False):
    '''
    Parse text as an integer of the given radix, into the 64-bit signed or unsigned
    range.
    :param text: Digits, with an optional leading '+' (or '-' when signed)
    :param radix: Numeral base, from 2 to 36
    :param signed: Parse into the signed 64-bit range rather than the unsigned one
    '''
    if radix not in range(2, len(DIGITS) + 1):
        raise ValueError(f"Radix must be in the range 2 to {len(DIGITS)}, got {radix}")
    if not text:
        raise ParseError("cannot parse integer from empty string")

    digits, negative = text, False
    if text[0] == '+':
        digits = text[1:]
    elif text[0] == '-' and signed:
        digits, negative = text[1:], True
    # ASCII digits only; some non-ASCII characters lower-case to ASCII letters
    allowed = DIGITS[:radix] + DIGITS[10:radix].upper()
    if not digits or any(c not in allowed for c in digits):
        raise ParseError("invalid digit found in string")

    num = int(digits, radix)
    if negative:
        num = -num
    if signed:
        min_num, max_num = -2 ** (NATIVE_BITS - 1), 2 ** (NATIVE_BITS - 1) - 1
    else:
        min_num, max_num = 0, 2 ** NATIVE_BITS - 1
    if num > max_num:
        raise ParseError("number too large to fit in target type")
    if num < min_num:
        raise ParseError("number too small to fit in target type")
    return num


def parse(text, radix, signed=False):
    '''
    Parse text into an integer of the given radix. Returns the integer and, for binary,
    octal and hex input, the number of significant bits spelled out by the digits
    (digit count times bits per digit). Decimal and other radixes give None for the
    significant bits.
    '''
    prefix = PREFIXES.get(radix)
    if prefix is None:
        return from_str_radix(text, radix, signed=signed), None

    trimmed = trim_prefix(trim_prefix(text, prefix), prefix.upper())
    num = from_str_radix(trimmed, radix, signed=signed)
    logging.debug(f"Parsed '{text}' in radix {radix} as {num} w/ {len(trimmed)} digits.")
    return num, len(trimmed) * RADIX_GROUP_BITS[radix]


def identify_radix(text):
    '''
    Radix implied by the first two characters of the text: '0x' for hex, '0b' for
    binary and '0o' or '0O' for octal. None if there is no recognised prefix.
    '''
    if text.startswith('0x'):
        return 16
    elif text.startswith('0b'):
        return 2
    elif text.startswith('0o') or text.startswith('0O'):
        return 8
    return None
