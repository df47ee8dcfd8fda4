#!/usr/bin/env python
# -*- coding: utf-8 -*-

import contextlib
import io
import re

import pytest
import unittest

from pyintinfo.cli import main

ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*m')


def run_cli(*argv):
    '''
    Run the command line, returning the exit status and the uncoloured stdout and stderr.
    '''
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        status = main(list(argv))
    return status, ANSI_ESCAPE.sub('', out.getvalue()), ANSI_ESCAPE.sub('', err.getvalue())


def info_block(decimal, binary, octal, hexadecimal):
    return (
        f"Decimal         =>  {decimal}\n"
        f"Binary          =>  0b{binary}\n"
        f"Octal           =>  0o{octal}\n"
        f"Hexadecimal     =>  0x{hexadecimal}\n"
    )


class CliTestCase(unittest.TestCase):

    def test_decimal_input(self):
        status, out, err = run_cli('10')
        self.assertEqual(status, 0)
        self.assertEqual(out, info_block('10', '1010', '12', 'a') + "\nBits: 4\n")
        self.assertEqual(err, '')

    def test_zero(self):
        status, out, _ = run_cli('0')
        self.assertEqual(status, 0)
        self.assertEqual(out, info_block('0', '0', '0', '0') + "\nBits: 1\n")

    def test_negative_with_twos_complement(self):
        status, out, _ = run_cli('-5', '-B', '-t')
        self.assertEqual(status, 0)
        self.assertEqual(
            out,
            info_block('-5', '11111011', '373', 'fb')
            + "\nBits: 8\n"
            + "\n2's Complement \\\n"
            + info_block('5', '00000101', '005', '05'),
        )

    def test_prefixed_input(self):
        _, out, _ = run_cli('0xff')
        self.assertEqual(out, info_block('255', '11111111', '377', 'ff') + "\nBits: 8\n")

        _, out, _ = run_cli('0x0f')
        self.assertIn('0b00001111', out, 'leading zero digits count towards the width')

        _, out, _ = run_cli('0o17')
        self.assertEqual(out, info_block('15', '001111', '17', '0f') + "\nBits: 6\n")

    def test_radix_and_width_flags(self):
        _, out, _ = run_cli('-x', 'ff', '-S')
        self.assertEqual(out, info_block('255', '0000000011111111', '000377', '00ff') + "\nBits: 16\n")

        _, out, _ = run_cli('--radix', '36', 'z')
        self.assertIn('Decimal         =>  35\n', out)

        _, out, _ = run_cli('--bytes', '3', '1')
        self.assertIn('Bits: 24', out)

        _, out, _ = run_cli('-n', '101', '--bits', '5')
        self.assertIn('0b00101', out)

    def test_sign_and_extension_flags(self):
        _, out, _ = run_cli('-s', '0xf0')
        self.assertIn('Decimal         =>  -16\n', out)

        _, out, _ = run_cli('-s', '-l', '0xf0')
        self.assertIn('Decimal         =>  -16\n', out)
        self.assertIn('0xfffffffffffffff0', out)

        _, out, _ = run_cli('--zero-extend', '-s', '-l', '0xf0')
        self.assertIn('Decimal         =>  240\n', out)
        self.assertIn('0x00000000000000f0', out)

        _, out, _ = run_cli('-e', '-B', '5')
        self.assertIn('0b11111101', out)

    def test_errors(self):
        status, out, err = run_cli('--bits', '65', '1')
        self.assertEqual(status, 1)
        self.assertEqual(out, '')
        self.assertEqual(err, "error: number of bits must be less than or equal to 64\n")

        status, _, err = run_cli('12z')
        self.assertEqual(status, 1)
        self.assertEqual(err, "error: invalid digit found in string\n")

        status, _, err = run_cli('18446744073709551616')
        self.assertEqual(status, 1)
        self.assertIn('number too large to fit in target type', err)

        status, _, err = run_cli('0x00000000000000001')
        self.assertEqual(status, 1)
        self.assertIn('exceeds the 64-bit storage', err)

    def test_negative_zero(self):
        status, out, _ = run_cli('-B', '-0')
        self.assertEqual(status, 0)
        self.assertEqual(out, info_block('0', '00000000', '000', '00') + "\nBits: 8\n")

        status, out, err = run_cli('-0')
        self.assertEqual(status, 1, '-0 needs 65 significant bits')
        self.assertEqual(out, '')
        self.assertIn('Width of 65 bits exceeds the 64-bit storage', err)

    def test_version(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out), pytest.raises(SystemExit) as e:
            main(['--version'])
        self.assertEqual(e.value.code, 0)
        self.assertTrue(out.getvalue().startswith('intinfo '))

    def test_exclusive_flags(self):
        with pytest.raises(SystemExit):
            run_cli('-B', '-S', '1')
        with pytest.raises(SystemExit):
            run_cli('-x', '-o', '1')
        with pytest.raises(SystemExit):
            run_cli('-e', '--zext', '1')


if __name__ == '__main__':
    unittest.main()
