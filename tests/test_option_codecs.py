# SPDX-License-Identifier: MIT

from ipaddress import IPv4Address

import pytest

from pseudodhcp.error import EncodeError
from pseudodhcp.option_codecs import Option, encode_option, encoders
from pseudodhcp.optiontypes import OptionType, MessageType


def test_every_option_type_has_an_encoder():
	assert set(encoders) == set(OptionType)


def test_router():
	assert encode_option(OptionType.ROUTER, ['192.168.1.1']) == bytes(
		[0x03, 0x04, 0xC0, 0xA8, 0x01, 0x01])


def test_domain_name_server_list():
	encoded = encode_option('domain_name_server',
		['209.18.47.61', '209.18.47.62'])
	assert encoded[:2] == b'\x06\x08'
	assert encoded[2:] == bytes([209, 18, 47, 61, 209, 18, 47, 62])


def test_subnet_mask():
	assert encode_option(OptionType.SUBNET_MASK, '255.255.255.0') == (
		b'\x01\x04\xFF\xFF\xFF\x00')


@pytest.mark.parametrize('value', [
	'192.168.1.1',
	IPv4Address('192.168.1.1'),
	b'\xC0\xA8\x01\x01',
	0xC0A80101,
])
def test_address_forms(value):
	assert encode_option(OptionType.DHCP_SERVER, value) == (
		b'\x36\x04\xC0\xA8\x01\x01')
	assert encode_option(OptionType.REQUESTED_IP_ADDRESS, value) == (
		b'\x32\x04\xC0\xA8\x01\x01')


def test_lease_time():
	assert encode_option(OptionType.IP_ADDRESS_LEASE_TIME, 84600) == (
		b'\x33\x04\x00\x01\x4A\x78')


@pytest.mark.parametrize('value', [MessageType.OFFER, 2, 'offer', 'OFFER'])
def test_message_type(value):
	assert encode_option(OptionType.DHCP_MESSAGE_TYPE, value) == b'\x35\x01\x02'


def test_parameter_request_list():
	encoded = encode_option('parameter_request_list',
		['subnet_mask', OptionType.ROUTER, 6, 15])
	assert encoded == b'\x37\x04\x01\x03\x06\x0F'


def test_option_keeps_value_and_payload():
	option = Option('router', ['10.0.0.1', '10.0.0.2'])
	assert option.kind is OptionType.ROUTER
	assert option.value == ['10.0.0.1', '10.0.0.2']
	assert len(option.payload) == 8
	assert option.size == 10


def test_largest_address_list():
	addresses = ['10.0.0.%d' % n for n in range(63)]
	encoded = encode_option(OptionType.ROUTER, addresses)
	assert encoded[1] == 252
	assert len(encoded) == 254


@pytest.mark.parametrize('kind,value', [
	(OptionType.ROUTER, ['10.0.0.%d' % n for n in range(64)]),
	(OptionType.PARAMETER_REQUEST_LIST, list(range(256))),
])
def test_payload_too_long(kind, value):
	with pytest.raises(EncodeError):
		Option(kind, value)


@pytest.mark.parametrize('kind,value', [
	(12, 'hostname'),
	('host_name', 'hostname'),
	(OptionType.DHCP_MESSAGE_TYPE, 'bogus'),
	(OptionType.DHCP_MESSAGE_TYPE, 9),
	(OptionType.IP_ADDRESS_LEASE_TIME, 1 << 32),
	(OptionType.IP_ADDRESS_LEASE_TIME, -1),
	(OptionType.SUBNET_MASK, '255.255.255.256'),
	(OptionType.ROUTER, []),
	(OptionType.ROUTER, '192.168.1.1'),
	(OptionType.PARAMETER_REQUEST_LIST, []),
	(OptionType.PARAMETER_REQUEST_LIST, [256]),
	(OptionType.PARAMETER_REQUEST_LIST, ['no_such_option']),
])
def test_rejected_at_construction(kind, value):
	with pytest.raises(EncodeError):
		Option(kind, value)


def test_encode_error_is_value_error():
	with pytest.raises(ValueError):
		encode_option(OptionType.SUBNET_MASK, 'not an address')

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
