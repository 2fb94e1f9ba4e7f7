# SPDX-License-Identifier: MIT

"""Ethernet, IPv4 and UDP framing for encoded DHCP messages."""

__all__ = ['IPV4_ETHERTYPE', 'IPPROTO_UDP', 'BROADCAST_MAC',
	'IPV4_FLAG_DONT_FRAGMENT', 'calculate_internet_checksum', 'parse_mac',
	'encapsulate_ethernet', 'encapsulate_ipv4', 'make_ipv4_pseudoheader',
	'encapsulate_udp']

import struct
from ipaddress import IPv4Address

from .error import ConfigurationError, EncodeError

IPV4_ETHERTYPE = 0x0800
IPPROTO_UDP = 17
BROADCAST_MAC = b'\xFF'*6

IPV4_FLAG_DONT_FRAGMENT = 0x02


def calculate_internet_checksum(packet):
	"""Calculate checksum of data as defined in RFC791."""
	if len(packet)%2:
		packet += b'\x00'

	checksum = 0
	for i in range(0, len(packet), 2):
		msb, lsb = packet[i:i + 2]
		checksum += msb << 8 | lsb
		checksum = (checksum & 0xFFFF) + (checksum >> 16)
	return ~checksum & 0xFFFF


def parse_mac(value):
	"""Accept 6 raw bytes or the usual colon/dash separated notation."""
	if isinstance(value, (bytes, bytearray)):
		result = bytes(value)
	else:
		try:
			result = bytes.fromhex(str(value).replace(':', '')
				.replace('-', ''))
		except ValueError:
			raise ConfigurationError('bad MAC address: %r' % value) from None
	if len(result) != 6:
		raise ConfigurationError('bad MAC address: %r' % value)
	return result


def encapsulate_ethernet(source, destination, ethertype, data):
	"""Wrap data in an Ethernet II header."""
	destination = bytes(destination)
	if len(destination) != 6:
		raise EncodeError('bad destination: %r' % destination)
	source = bytes(source)
	if len(source) != 6:
		raise EncodeError('bad source: %r' % source)
	if ethertype not in range(1 << 16):
		raise EncodeError('bad ethertype: %r' % ethertype)

	return struct.pack('!6s6sH', destination, source, ethertype) + data


def encapsulate_ipv4(source, destination, protocol, data, *,
	identification=0, flags=0, time_to_live=64):
	source = IPv4Address(source)
	destination = IPv4Address(destination)
	data = bytes(data)

	if identification not in range(1 << 16):
		raise EncodeError('bad identification: %r' % identification)

	if flags not in range(1 << 3):
		raise EncodeError('bad flags: %r' % flags)

	if time_to_live not in range(1 << 8):
		raise EncodeError('bad TTL: %r' % time_to_live)

	if protocol not in range(1 << 8):
		raise EncodeError('bad protocol: %r' % protocol)

	version = 0x04
	header_length = 5
	total_length = header_length*4 + len(data)
	if total_length not in range(1 << 16):
		raise EncodeError('bad total length: %r' % total_length)

	def pack_header(checksum):
		return struct.pack('!BBHHHBBH4s4s', (version << 4) | header_length,
			0, total_length, identification, flags << 13, time_to_live,
			protocol, checksum, source.packed, destination.packed)

	header = pack_header(calculate_internet_checksum(pack_header(0)))
	return header + data


def make_ipv4_pseudoheader(source, destination, protocol, data_length):
	source = IPv4Address(source)
	destination = IPv4Address(destination)

	if protocol not in range(1 << 8):
		raise EncodeError('bad protocol: %r' % protocol)

	return struct.pack('!4s4sxBH', source.packed, destination.packed, protocol,
		data_length)


def encapsulate_udp(source, destination, data, *, pseudoheader=None):
	if source not in range(1 << 16):
		raise EncodeError('bad source: %r' % source)

	if destination not in range(1 << 16):
		raise EncodeError('bad destination: %r' % destination)

	if not isinstance(data, bytes):
		raise EncodeError('bad data: %r' % data)

	checksum = 0
	if pseudoheader is not None:
		udp_header = struct.pack('!HHHH', source, destination, len(data) + 8,
			checksum)
		checksum = calculate_internet_checksum(pseudoheader + udp_header
			+ data)
		# NOTE: an all-zero UDP checksum means "no checksum" (RFC 768)
		if checksum == 0:
			checksum = 0xFFFF

	udp_header = struct.pack('!HHHH', source, destination, len(data) + 8,
		checksum)

	return udp_header + data

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
