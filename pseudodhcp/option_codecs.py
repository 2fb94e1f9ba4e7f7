# SPDX-License-Identifier: MIT

"""Option codec

Every supported option is written as a type-length-value triple,
``[code][length][payload]``. The payload shape is fixed by the option type;
the table at the bottom of this module maps each OptionType to the function
shaping its payload. Values are shaped when an Option is constructed, so an
invalid value is rejected before anything is encoded.

"""

__all__ = ['MAX_OPTION_LENGTH', 'Option', 'encode_option', 'encoders']

from collections import namedtuple
from functools import wraps
from ipaddress import IPv4Address

from .error import EncodeError
from .fields import be32, uint8
from .optiontypes import OptionType, get as get_option, get_message_type

MAX_OPTION_LENGTH = 0xFF


def make_guarded(fn, check, message):
	"""Reject calls for which check() is false before calling fn."""
	@wraps(fn)
	def wrapper(value):
		if not check(value):
			raise EncodeError('%s: %r' % (message, value))
		return fn(value)
	return wrapper


def encode_ip(decoded):
	try:
		return IPv4Address(decoded).packed
	except ValueError:
		raise EncodeError('invalid IP address: %r' % decoded) from None


def encode_ips(decoded):
	if isinstance(decoded, (str, bytes, IPv4Address)):
		raise EncodeError('expected a list of IP addresses, not %r' % decoded)
	return b''.join(encode_ip(value) for value in decoded)


def encode_message_type(decoded):
	return uint8(get_message_type(decoded))


def encode_parameter(decoded):
	if isinstance(decoded, str):
		return get_option(decoded)
	if not isinstance(decoded, int) or decoded not in range(0x100):
		raise EncodeError('%r is not an option code' % decoded)
	return decoded


def encode_parameter_list(decoded):
	if isinstance(decoded, (bytes, bytearray)):
		return bytes(decoded)
	if isinstance(decoded, str):
		raise EncodeError('expected a list of option codes, not %r' % decoded)
	return bytes(encode_parameter(value) for value in decoded)


def _non_empty(value):
	try:
		return len(value) > 0
	except TypeError:
		# NOTE: generators have no length, they are checked once consumed
		return True


ip_list_encoder = make_guarded(encode_ips, _non_empty,
	'an address list needs at least one address')

encoders = {
	OptionType.SUBNET_MASK: encode_ip,
	OptionType.ROUTER: ip_list_encoder,
	OptionType.DOMAIN_NAME_SERVER: ip_list_encoder,
	OptionType.REQUESTED_IP_ADDRESS: encode_ip,
	OptionType.IP_ADDRESS_LEASE_TIME: be32,
	OptionType.DHCP_MESSAGE_TYPE: encode_message_type,
	OptionType.DHCP_SERVER: encode_ip,
	OptionType.PARAMETER_REQUEST_LIST: make_guarded(encode_parameter_list,
		_non_empty, 'a parameter request list needs at least one entry'),
}


class Option(namedtuple('Option', 'kind value payload')):
	"""One DHCP option, shaped and checked at construction."""
	__slots__ = ()

	def __new__(cls, kind, value):
		kind = get_option(kind)
		try:
			encoder = encoders[kind]
		except KeyError:
			raise EncodeError('option %r cannot be encoded' % kind) from None
		payload = encoder(value)
		if not payload:
			raise EncodeError('option %s has an empty payload' % kind.name)
		if len(payload) > MAX_OPTION_LENGTH:
			raise EncodeError('option %s payload is %d bytes long, at most %d '
				'fit' % (kind.name, len(payload), MAX_OPTION_LENGTH))
		return super().__new__(cls, kind, value, payload)

	@property
	def size(self):
		return 2 + len(self.payload)

	def encode(self):
		return bytes([self.kind, len(self.payload)]) + self.payload

	def __repr__(self):
		return '%s(%s, %r)' % (type(self).__name__, self.kind.name, self.value)


def encode_option(kind, value):
	return Option(kind, value).encode()

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
