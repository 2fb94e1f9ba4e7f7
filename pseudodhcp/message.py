# SPDX-License-Identifier: MIT

__all__ = ['Operation', 'Flags', 'OptionMap', 'MessageFields',
	'encode_message', 'DHCP_MAGIC_COOKIE', 'END_MARKER', 'HEADER_SIZE',
	'NULL_IP']

import enum
import struct
from collections import namedtuple
from ipaddress import IPv4Address

from .error import EncodeError
from .fields import fixed_bytes
from .hardwaretype import HardwareType, ETHERNET_ADDRESS_LENGTH
from .option_codecs import Option
from .optiontypes import get as get_option, resolve


@enum.unique
class Operation(enum.IntEnum):
	REQUEST = 1
	REPLY = 2


@enum.unique
class Flags(enum.IntFlag):
	BROADCAST = 1 << 15


DHCP_MAGIC_COOKIE = 0x63825363
END_MARKER = b'\xFF'
NULL_IP = IPv4Address('0.0.0.0')
MAX_SECONDS = 0xFFFF

CODEC = struct.Struct(
	'!'			# network byte order (big)
	'BBBB'		# op, htype, hlen, hops
	'I'			# xid
	'HH'		# secs, flags
	'4s'		# ciaddr (client ip)
	'4s'		# yiaddr (given ip by server)
	'4s'		# siaddr (server ip address)
	'4s'		# giaddr (gateway ip address)
	'16s'		# chaddr (client hardware address)
	'64s'		# server host name, always zero
	'128s'		# boot file name, always zero
	'I'			# magic cookie
)
HEADER_SIZE = CODEC.size


class OptionMap:
	"""Ordered mapping of option type to Option.

	Insertion order is the order options are written in. Values are shaped
	when they are set, so an OptionMap only ever holds encodable options.

	"""

	@staticmethod
	def check_options(options):
		if options is None:
			return []
		if isinstance(options, OptionMap):
			return list(options.values())
		if isinstance(options, dict):
			options = options.items()

		try:
			items = iter(options)
		except TypeError:
			raise EncodeError('not an option container: %r'
				% (options,)) from None

		seen = set()
		result = []
		for item in items:
			if isinstance(item, Option):
				option = item
			else:
				try:
					kind, value = item
				except (TypeError, ValueError):
					raise EncodeError('expected an (option, value) pair, not %r'
						% (item,)) from None
				option = Option(kind, value)
			if option.kind in seen:
				raise EncodeError('option %s given more than once'
					% option.kind.name)
			seen.add(option.kind)
			result.append(option)
		return result

	def __init__(self, values=None):
		self._options = {
			option.kind: option
			for option
			in self.check_options(values)
		}

	def __getitem__(self, key):
		return self._options[get_option(key)].value

	def __setitem__(self, key, value):
		option = Option(key, value)
		self._options[option.kind] = option

	def __delitem__(self, key):
		del self._options[get_option(key)]

	def __contains__(self, key):
		try:
			return get_option(key) in self._options
		except EncodeError:
			return False

	def __iter__(self):
		return iter(self._options)

	def __len__(self):
		return len(self._options)

	def keys(self):
		return self._options.keys()

	def values(self):
		return self._options.values()

	def items(self):
		return self._options.items()

	def get(self, key, default=None):
		try:
			return self[key]
		except KeyError:
			return default

	def __repr__(self):
		return '%s(%r)' % (type(self).__name__, list(self._options.values()))

	@property
	def size(self):
		return sum(option.size for option in self._options.values())

	def encode(self):
		return b''.join(option.encode() for option in self._options.values())


def _address(name, value):
	try:
		return IPv4Address(value).packed
	except ValueError:
		raise EncodeError('invalid %s: %r' % (name, value)) from None


def _ranged(name, value, limit):
	if not isinstance(value, int) or value not in range(limit):
		raise EncodeError('%s `%r` not in range(%#x)' % (name, value, limit))
	return value


class MessageFields(namedtuple('MessageFields', 'op htype hops xid secs'
	' broadcast ciaddr yiaddr siaddr giaddr chaddr options',
	defaults=(HardwareType.ETHERNET, 0, 0, 0, False, NULL_IP, NULL_IP, NULL_IP,
		NULL_IP, b'', None))):
	"""One encode request.

	Only `op` is required; addresses default to 0.0.0.0 and `options` is
	anything OptionMap accepts.

	"""
	__slots__ = ()

	def encode(self):
		return encode_message(self)


def encode_message(fields):
	"""Encode a BOOTP header, the DHCP magic cookie and the option stream.

	Every field is checked before the first byte is produced, so either the
	whole message is returned or EncodeError is raised.

	"""
	op = resolve(Operation, fields.op)
	htype = resolve(HardwareType, fields.htype)
	hops = _ranged('hops', fields.hops, 0x100)
	xid = _ranged('xid', fields.xid, 0x100000000)

	if not isinstance(fields.secs, int) or fields.secs < 0:
		raise EncodeError('secs `%r` is not a non-negative integer'
			% (fields.secs,))
	secs = min(fields.secs, MAX_SECONDS)

	flags = Flags.BROADCAST if fields.broadcast else 0

	if not isinstance(fields.chaddr, (bytes, bytearray, memoryview)):
		raise EncodeError('hardware address must be bytes, not `%r`'
			% (fields.chaddr,))
	chaddr = bytes(fields.chaddr)
	if len(chaddr) > 16:
		raise EncodeError('hardware address too long: `%r`' % chaddr)
	if htype == HardwareType.ETHERNET:
		hlen = ETHERNET_ADDRESS_LENGTH
	else:
		hlen = len(chaddr)

	options = OptionMap(fields.options)

	header = CODEC.pack(
		op, htype, hlen, hops,
		xid,
		secs, flags,
		_address('ciaddr', fields.ciaddr),
		_address('yiaddr', fields.yiaddr),
		_address('siaddr', fields.siaddr),
		_address('giaddr', fields.giaddr),
		fixed_bytes(chaddr, 16),
		b'',
		b'',
		DHCP_MAGIC_COOKIE
	)
	return header + options.encode() + END_MARKER

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
