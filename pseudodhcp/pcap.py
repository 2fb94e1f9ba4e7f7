# SPDX-License-Identifier: MIT

"""libpcap capture writer

Packets are kept in memory until encode() is called. Timestamps are integer
nanoseconds and are written with microsecond resolution.

"""

__all__ = ['Endian', 'LinkLayer', 'Packet', 'PCAP']

from enum import Enum, IntEnum
from struct import Struct

VERSION = (2, 4)
MAGIC = 0xA1B2C3D4


class Endian(Enum):
	NATIVE = '@'
	BIG = '>'
	LITTLE = '<'


class LinkLayer(IntEnum):
	ETHERNET = 0x00000001
	RAW_IP = 0x00000065
	RAW_IPV4 = 0x000000E4


# NOTE: pcap format
# https://www.netresec.com/?page=Blog&month=2022-10&post=What-is-a-PCAP-file
HEADER_FMT = '%sIHHiIII'	# magic, version, zone, accuracy, snaplen, link
PACKET_FMT = '%sIIII'		# seconds, microseconds, captured, original


class Packet:
	def __init__(self, data, timestamp):
		self.data = data
		self.timestamp = timestamp

	def __repr__(self):
		if len(self.data) > 20:
			data_window = self.data[:16] + b'...'
		else:
			data_window = self.data
		return '%s(%r, timestamp=%d)' % (type(self).__name__, data_window,
			self.timestamp)


class PCAP:
	def __init__(self, *, link_layer=LinkLayer.ETHERNET, max_packet=0xFFFF,
		endian=None, timezone=0, accuracy=0):
		self.link_layer = LinkLayer(link_layer)
		self.max_packet = max_packet

		if endian is None:
			endian = Endian.BIG
		else:
			endian = Endian(endian)
		self.endian = endian

		self.timezone = timezone
		self.accuracy = accuracy

		self.header_struct = Struct(HEADER_FMT % self.endian.value)
		self.packet_struct = Struct(PACKET_FMT % self.endian.value)
		self.packets = []

	def __len__(self):
		return len(self.packets)

	def add(self, data, timestamp):
		packet = Packet(bytes(data), timestamp)
		self.packets.append(packet)
		return packet

	def encode_header(self):
		return self.header_struct.pack(MAGIC, VERSION[0], VERSION[1],
			self.timezone, self.accuracy, self.max_packet, self.link_layer)

	def encode_packet(self, packet):
		seconds, nanoseconds = divmod(packet.timestamp, 1000000000)
		return self.packet_struct.pack(
			seconds,
			nanoseconds//1000,
			min(self.max_packet, len(packet.data)),
			len(packet.data)
		) + packet.data[:self.max_packet]

	def encode(self):
		return self.encode_header() + b''.join(
			self.encode_packet(packet)
			for packet
			in self.packets
		)

	def write(self, file):
		"""Write the capture to a path or a binary file object."""
		if hasattr(file, 'write'):
			file.write(self.encode())
		else:
			with open(file, 'wb') as capture:
				capture.write(self.encode())

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
