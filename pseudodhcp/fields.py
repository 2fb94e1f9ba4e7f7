# SPDX-License-Identifier: MIT

"""Fixed-width field encoders shared by the option and message codecs."""

__all__ = ['uint8', 'be16', 'be32', 'fixed_bytes']

from struct import Struct, error as StructError

from .error import EncodeError

_uint8 = Struct('!B')
_uint16 = Struct('!H')
_uint32 = Struct('!I')


def _make_packer(struct, name):
	def packer(value):
		try:
			return struct.pack(value)
		except StructError:
			raise EncodeError('%r does not fit in %s' % (value, name)) from None
	packer.__name__ = name
	return packer


uint8 = _make_packer(_uint8, 'uint8')
be16 = _make_packer(_uint16, 'be16')
be32 = _make_packer(_uint32, 'be32')


def fixed_bytes(buf, width):
	"""Left-justify buf in a field of width bytes, padding with zeros."""
	buf = bytes(buf)
	if len(buf) > width:
		raise EncodeError('%r is longer than %d bytes' % (buf, width))
	return buf + b'\0'*(width - len(buf))

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
