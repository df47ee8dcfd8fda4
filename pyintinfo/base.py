#!/usr/bin/env python
# -*- coding: utf-8 -*-

import numpy as np

'''
Stateless functions over LSB-first bit sequences that are used throughout the
integer and rendering code. A bit sequence is a one-dimensional numpy array of
booleans, where index 0 holds the least-significant bit.
'''

NATIVE_BITS = 64

# Number of bits that make up a single digit, for the radixes rendered bit-group-wise.
RADIX_GROUP_BITS = {
    2: 1,
    8: 3,
    16: 4,
}


def storage_bits(num):
    '''
    Width of the native storage behind a source value. numpy integer scalars carry
    their own width, plain Python integers are treated as the 64-bit native word.
    '''
    if isinstance(num, np.integer):
        return num.dtype.itemsize * 8
    return NATIVE_BITS


def native_bit_view(num):
    '''
    View a native value as its full storage width of bits, LSB first. Negative
    values are viewed through their two's-complement pattern.
    :param num: Python int or numpy integer scalar
    :return: Writable numpy boolean array of length storage_bits(num)
    '''
    width = storage_bits(num)
    pattern = int(num)
    if not isinstance(num, np.integer) and pattern not in range(-2 ** (width - 1), 2 ** width):
        raise ValueError(f"Value {pattern} does not fit a {width:,d}-bit native integer")
    pattern &= (1 << width) - 1
    raw = np.frombuffer(pattern.to_bytes(width // 8, 'little'), dtype=np.uint8)
    return np.unpackbits(raw, bitorder='little').astype(bool)


def significant_bits(bits):
    '''
    Position of the highest set bit plus one, or 0 when no bit is set.
    '''
    set_bits = np.flatnonzero(bits)
    if set_bits.size == 0:
        return 0
    return int(set_bits[-1]) + 1


def int_from_slice(bits, width=NATIVE_BITS):
    '''
    Convert a bit slice (index 0 = least significant within the slice) into an
    unsigned integer of at most `width` bits.
    '''
    assert len(bits) <= width, f"Slice of {len(bits):,d} bits does not fit {width:,d} bits"
    num = 0
    for idx in np.flatnonzero(bits):
        num |= 1 << int(idx)
    return num


def make_slice_twos_complement(bits):
    '''
    Negate a bit slice in place, in its fixed width: every bit strictly above the
    lowest set bit is inverted. An all-zero slice is left as is.
    '''
    set_bits = np.flatnonzero(bits)
    if set_bits.size:
        first_one = int(set_bits[0])
        bits[first_one + 1:] = ~bits[first_one + 1:]


def bits_to_char(bits, radix):
    '''
    Single digit for a bit slice. The slice length should suit the radix, i.e. at most
    3 bits for octal and 4 for hex.
    '''
    digit = int_from_slice(bits, width=RADIX_GROUP_BITS[radix])
    assert digit < radix, f"Digit {digit} has no representation in radix {radix}"
    return np.base_repr(digit, base=radix).lower()


def bits_to_digits(bits, group_size, radix):
    '''
    Render a bit sequence as a digit string. The bits are partitioned into groups of
    `group_size` starting from index 0, so the most-significant group may be short,
    and the groups are emitted most-significant first.
    '''
    groups = [bits[start:start + group_size] for start in range(0, len(bits), group_size)]
    return ''.join(bits_to_char(group, radix) for group in reversed(groups))
