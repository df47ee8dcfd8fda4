#!/usr/bin/env python
# -*- coding: utf-8 -*-

import dataclasses
import logging
import re
from typing import Optional

import numpy as np

from pyintinfo.base import (
    NATIVE_BITS,
    RADIX_GROUP_BITS,
    bits_to_digits,
    int_from_slice,
    make_slice_twos_complement,
    native_bit_view,
    significant_bits,
    storage_bits,
)


# Format spec that is only a 0 flag and a width, e.g. '08'.
ZERO_PAD_SPEC = re.compile(r'0(\d+)')


class WidthExceedsStorage(ValueError):
    '''
    Requested integer width is wider than the native value it is built from.
    '''

    def __init__(self, size, storage_bits):
        super().__init__(f"Width of {size:,d} bits exceeds the {storage_bits:,d}-bit storage of the value")
        self.size = size
        self.storage_bits = storage_bits


@dataclasses.dataclass(frozen=True)
class IntegerOptions:
    '''
    Options to build an Integer from a native value.
    :param signed: Whether the integer is signed.
    :param size: Number of bits the integer should have.
    :param significant_bits: Number of significant bits in the source value. Inferred
    from the highest set bit when omitted.
    :param sign_extend: Whether to extend with 1-bits when `size` is more than the
    number of significant bits. The fill is always 1, whatever the sign bit is.
    '''
    signed: bool = False
    size: int = 0
    significant_bits: Optional[int] = None
    sign_extend: bool = False


class Integer:
    '''
    Fixed-width integer backed by an explicit sequence of bits rather than a machine
    word, so that sign handling, width truncation/extension and radix rendering are
    all explicit operations.
    '''

    # Format spec type characters handled by __format__, mapped to (group size, radix).
    FORMAT_TYPES = {
        'b': (RADIX_GROUP_BITS[2], 2),
        'o': (RADIX_GROUP_BITS[8], 8),
        'x': (RADIX_GROUP_BITS[16], 16),
        'X': (RADIX_GROUP_BITS[16], 16),
    }

    def __init__(self, num, options=IntegerOptions()):
        '''
        Initialize the integer from a native value and build options.
        :param num: Python int (viewed as a 64-bit word) or numpy integer scalar
        :param options: IntegerOptions for the width, sign and extension
        :raises WidthExceedsStorage: if options.size is wider than the storage of num
        '''
        width = storage_bits(num)
        if options.size < 0:
            raise ValueError(f"Integer width must not be negative, got {options.size}")
        if options.size > width:
            raise WidthExceedsStorage(options.size, width)

        view = native_bit_view(num)
        significant = options.significant_bits
        if significant is None:
            significant = significant_bits(view)

        if options.sign_extend and options.size > significant:
            view[significant:options.size] = True

        self._bits = view[:options.size].copy()
        self._negative = bool(options.signed and options.size > 0 and self._bits[-1])
        logging.debug(
            f"Built {options.size}-bit integer from {significant} significant bits "
            f"(signed={options.signed}, sign_extend={options.sign_extend})."
        )

    def __repr__(self):
        return f"integer{self.bits()}({self})"

    def __eq__(self, o):
        return np.array_equal(self._bits, o._bits) and self._negative == o._negative

    def __str__(self):
        return self.decimal_string()

    def __format__(self, format_spec):
        '''
        Render through the format() machinery. The type character picks the radix
        (d, b, o, x or X) and the remaining spec is applied as it is for strings,
        except that a 0 flag before the width pads with zeros on the left.
        '''
        kind = format_spec[-1:]
        if kind == 'd':
            text = self.decimal_string()
        elif kind in self.FORMAT_TYPES:
            text = bits_to_digits(self._bits, *self.FORMAT_TYPES[kind])
        else:
            kind = ''
            text = self.decimal_string()
        if kind == 'X':
            text = text.upper()
        rest = format_spec[:len(format_spec) - len(kind)]
        zero_pad = ZERO_PAD_SPEC.fullmatch(rest)
        if zero_pad:
            return text.zfill(int(zero_pad.group(1)))
        return format(text, rest)

    def bits(self):
        '''
        The number of bits in the integer.
        '''
        return len(self._bits)

    def is_negative(self):
        return self._negative

    def bit_array(self):
        '''
        Copy of the bits, LSB first.
        '''
        return self._bits.copy()

    def twos_complement(self):
        '''
        Bits of the two's complement of this integer, leaving the integer unchanged.
        '''
        bits = self._bits.copy()
        make_slice_twos_complement(bits)
        return bits

    def make_twos_complement(self):
        '''
        Convert the integer into its two's complement in place. The negative flag can
        only be cleared here: it stays set only if it was set and the new MSB is set.
        '''
        make_slice_twos_complement(self._bits)
        self._negative = bool(self._negative and self.bits() > 0 and self._bits[-1])

    def decimal_string(self):
        if not self._negative:
            return str(int_from_slice(self._bits))
        # reinterpret the unsigned 64-bit magnitude as signed, then negate with wrapping
        num = int_from_slice(self.twos_complement())
        if num >= 2 ** (NATIVE_BITS - 1):
            num -= 2 ** NATIVE_BITS
        num = -num
        if num >= 2 ** (NATIVE_BITS - 1):
            num -= 2 ** NATIVE_BITS
        return str(num)

    def binary_string(self):
        return bits_to_digits(self._bits, *self.FORMAT_TYPES['b'])

    def octal_string(self):
        return bits_to_digits(self._bits, *self.FORMAT_TYPES['o'])

    def hex_string(self):
        return bits_to_digits(self._bits, *self.FORMAT_TYPES['x'])
