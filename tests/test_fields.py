# SPDX-License-Identifier: MIT

import pytest

from pseudodhcp.error import EncodeError
from pseudodhcp.fields import uint8, be16, be32, fixed_bytes


def test_be16():
	assert be16(0) == b'\x00\x00'
	assert be16(0x8000) == b'\x80\x00'
	assert be16(0xFFFF) == b'\xFF\xFF'


def test_be32():
	assert be32(84600) == b'\x00\x01\x4A\x78'
	assert be32(0x63825363) == b'\x63\x82\x53\x63'


@pytest.mark.parametrize('packer,value', [
	(uint8, 0x100),
	(uint8, -1),
	(be16, 0x10000),
	(be32, 0x100000000),
	(be32, -1),
	(be32, 'ten'),
])
def test_out_of_range(packer, value):
	with pytest.raises(EncodeError):
		packer(value)


def test_fixed_bytes_pads_on_the_right():
	assert fixed_bytes(b'\x01\x02', 4) == b'\x01\x02\x00\x00'
	assert fixed_bytes(b'', 3) == b'\x00\x00\x00'
	assert fixed_bytes(b'\xAA'*16, 16) == b'\xAA'*16


def test_fixed_bytes_too_long():
	with pytest.raises(EncodeError):
		fixed_bytes(b'\x00'*17, 16)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
