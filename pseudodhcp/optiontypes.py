# SPDX-License-Identifier: MIT

__all__ = ['OptionType', 'MessageType', 'get', 'get_message_type',
	'resolve']

import enum

from .error import EncodeError


# NOTE: only the options this package knows how to shape are listed; adding a
# member here without adding an encoder in option_codecs is caught by the
# test suite
@enum.unique
class OptionType(enum.IntEnum):
	SUBNET_MASK = 1
	ROUTER = 3
	DOMAIN_NAME_SERVER = 6
	REQUESTED_IP_ADDRESS = 50
	IP_ADDRESS_LEASE_TIME = 51
	DHCP_MESSAGE_TYPE = 53
	DHCP_SERVER = 54
	PARAMETER_REQUEST_LIST = 55


@enum.unique
class MessageType(enum.IntEnum):
	DISCOVER = 1
	OFFER = 2
	REQUEST = 3
	DECLINE = 4
	ACK = 5
	NAK = 6
	RELEASE = 7
	INFORM = 8


def resolve(enumeration, value):
	"""Look up an enumeration member by member, value or case-insensitive
	name. Raises EncodeError for anything else."""
	if isinstance(value, enumeration):
		return value
	if isinstance(value, str):
		try:
			return enumeration[value.upper()]
		except KeyError:
			raise EncodeError('%r is not a valid %s name'
				% (value, enumeration.__name__)) from None
	try:
		return enumeration(value)
	except (ValueError, TypeError):
		raise EncodeError('%r is not a valid %s'
			% (value, enumeration.__name__)) from None


def get(value):
	return resolve(OptionType, value)


def get_message_type(value):
	return resolve(MessageType, value)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
