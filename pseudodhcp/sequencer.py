# SPDX-License-Identifier: MIT

"""Transaction sequencer

Writes complete DHCP exchanges into a packet capture. A Session owns the
simulated clock, the single transaction id generator and the capture; each
DHCPTransaction borrows them to encode, frame and record its messages::

	session = Session(seed=0xCAFE)
	with session.transaction() as dhcp:
		dhcp.discover()
		dhcp.offer('192.168.0.151', 84600)
		dhcp.request('192.168.0.151')
		dhcp.insert_delay(2)
		dhcp.ack('192.168.0.151', 84600)
	session.write('sample.pcap')

"""

__all__ = ['ConnectionOptions', 'MessageOptions', 'Session',
	'DHCPTransaction']

import logging
from collections import namedtuple
from ipaddress import IPv4Address
from time import time_ns

from .error import ConfigurationError, EncodeError, TransactionError
from .message import Operation, MessageFields, encode_message, NULL_IP
from .optiontypes import OptionType, MessageType, get_message_type
from .packet import (BROADCAST_MAC, IPV4_ETHERTYPE, IPPROTO_UDP,
	IPV4_FLAG_DONT_FRAGMENT, encapsulate_ethernet, encapsulate_ipv4,
	encapsulate_udp, make_ipv4_pseudoheader, parse_mac)
from .pcap import PCAP, LinkLayer
from .transaction import (DEFAULT_SEED, NANOSECONDS, Transaction,
	TransactionIdGenerator)

DHCP_SERVER_PORT = 67
DHCP_CLIENT_PORT = 68
BROADCAST_IP = IPv4Address('255.255.255.255')

DEFAULT_CLIENT_MAC = '02:00:00:00:00:01'
DEFAULT_SERVER_MAC = '02:00:00:00:00:02'
DEFAULT_PACKET_INTERVAL = 1000000

SUPPORTED_TRANSPORTS = ('udp',)


class ConnectionOptions(namedtuple('ConnectionOptions', 'transport src_port'
	' dst_port src_ip dst_ip src_mac dst_mac',
	defaults=('udp', DHCP_CLIENT_PORT, DHCP_SERVER_PORT, '0.0.0.0',
		'192.168.1.1', None, None))):
	"""Addressing of one exchange; `src` is the client, `dst` the server.

	`src_mac` and `dst_mac` fall back to the session's MAC addresses.

	"""
	__slots__ = ()

	@classmethod
	def coerce(cls, value):
		if value is None:
			return cls()
		if isinstance(value, cls):
			return value
		try:
			return cls(**value)
		except TypeError as e:
			raise ConfigurationError('bad connection options: %s' % e) from None


OPTION_FIELDS = [kind.name.lower() for kind in OptionType]
HEADER_OVERRIDE_FIELDS = ['hops', 'broadcast', 'client_ip', 'gateway_ip']


class MessageOptions(namedtuple('MessageOptions',
	OPTION_FIELDS + HEADER_OVERRIDE_FIELDS,
	defaults=(None,)*(len(OPTION_FIELDS) + len(HEADER_OVERRIDE_FIELDS)))):
	"""Optional values a caller adds to a message.

	One field per OptionType plus the header fields a caller may override;
	None means "not set". An option that the message already carries is
	replaced in place, others are appended in field order.

	"""
	__slots__ = ()

	@classmethod
	def coerce(cls, value):
		if value is None:
			return cls()
		if isinstance(value, cls):
			return value
		try:
			value = dict(value)
		except (TypeError, ValueError):
			raise EncodeError('not a message option mapping: %r' % (value,)
				) from None
		values = {}
		for key, item in value.items():
			if isinstance(key, OptionType):
				key = key.name
			values[str(key).lower()] = item
		try:
			return cls(**values)
		except TypeError as e:
			raise EncodeError('unknown message option: %s' % e) from None

	def options(self):
		return [
			(kind, getattr(self, name))
			for kind, name
			in zip(OptionType, OPTION_FIELDS)
			if getattr(self, name) is not None
		]

	def apply(self, fields):
		options = dict(fields.options)
		options.update(self.options())

		overrides = {}
		if self.hops is not None:
			overrides['hops'] = self.hops
		if self.broadcast is not None:
			overrides['broadcast'] = self.broadcast
		if self.client_ip is not None:
			overrides['ciaddr'] = self.client_ip
		if self.gateway_ip is not None:
			overrides['giaddr'] = self.gateway_ip

		return fields._replace(options=options, **overrides)


class Session:
	def __init__(self, *, seed=DEFAULT_SEED, start_time=None,
		packet_interval=DEFAULT_PACKET_INTERVAL,
		client_mac=DEFAULT_CLIENT_MAC, server_mac=DEFAULT_SERVER_MAC,
		logger=None, max_packet=0xFFFF):
		if logger is None:
			logger = logging.getLogger(__name__)
		self.logger = logger

		self.generator = TransactionIdGenerator(seed)

		if start_time is None:
			start_time = time_ns()
		self.timestamp = start_time

		if packet_interval < 0:
			raise ConfigurationError('bad packet interval: %r'
				% packet_interval)
		self.packet_interval = packet_interval

		self.client_mac = parse_mac(client_mac)
		self.server_mac = parse_mac(server_mac)
		self.pcap = PCAP(link_layer=LinkLayer.ETHERNET, max_packet=max_packet)
		self._identification = 0

	def advance(self, seconds):
		"""Move the simulated clock forward."""
		if seconds < 0:
			raise ConfigurationError('cannot go back in time: %r' % seconds)
		self.timestamp += int(seconds*NANOSECONDS)
		self.logger.debug('clock advanced by %ss', seconds)

	def next_identification(self):
		identification = self._identification
		self._identification = (self._identification + 1) & 0xFFFF
		return identification

	def transaction(self, connection=None):
		return DHCPTransaction(self, connection)

	def emit(self, frame):
		packet = self.pcap.add(frame, self.timestamp)
		self.timestamp += self.packet_interval
		return packet

	def encode(self):
		return self.pcap.encode()

	def write(self, file):
		self.pcap.write(file)


class DHCPTransaction(Transaction):
	def __init__(self, session, connection=None):
		super().__init__(session.generator, session.timestamp)
		self.session = session
		self.logger = session.logger

		connection = ConnectionOptions.coerce(connection)
		if connection.transport not in SUPPORTED_TRANSPORTS:
			raise ConfigurationError('unsupported transport: %r'
				% (connection.transport,))
		for port in (connection.src_port, connection.dst_port):
			if not isinstance(port, int) or port not in range(1 << 16):
				raise ConfigurationError('bad port: %r' % (port,))
		try:
			self.client_ip = IPv4Address(connection.src_ip)
			self.server_ip = IPv4Address(connection.dst_ip)
		except ValueError as e:
			raise ConfigurationError('bad connection address: %s' % e) from None
		self.client_mac = (session.client_mac if connection.src_mac is None
			else parse_mac(connection.src_mac))
		self.server_mac = (session.server_mac if connection.dst_mac is None
			else parse_mac(connection.dst_mac))
		self.connection = connection

		self.aborted = False
		self.logger.info('%#010x - transaction started', self.id)

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_value, traceback):
		if self.aborted:
			self.logger.info('%#010x - transaction ended, stopped', self.id)
		else:
			self.logger.info('%#010x - transaction ended after %ds', self.id,
				self.current_time)
		return False

	@property
	def current_time(self):
		"""Simulated seconds since the transaction started."""
		return self.elapsed_seconds(self.session.timestamp)

	def insert_delay(self, seconds):
		self.check()
		self.session.advance(seconds)

	def check(self):
		if self.aborted:
			raise TransactionError('transaction %#010x was stopped' % self.id)

	def fields(self, message_type, *, op, broadcast=False, yiaddr=NULL_IP,
		siaddr=None, options=()):
		if siaddr is None:
			siaddr = self.server_ip
		return MessageFields(
			op=op,
			xid=self.id,
			secs=self.current_time,
			broadcast=broadcast,
			ciaddr=NULL_IP,
			yiaddr=yiaddr,
			siaddr=siaddr,
			giaddr=NULL_IP,
			chaddr=self.client_mac,
			options={
				OptionType.DHCP_MESSAGE_TYPE: message_type,
				**dict(options)
			}
		)

	def frame(self, data, *, from_client, destination_mac):
		if from_client:
			source_mac = self.client_mac
			source_ip = self.client_ip
			source_port = self.connection.src_port
			destination_port = self.connection.dst_port
		else:
			source_mac = self.server_mac
			source_ip = self.server_ip
			source_port = self.connection.dst_port
			destination_port = self.connection.src_port

		pseudoheader = make_ipv4_pseudoheader(source_ip, BROADCAST_IP,
			IPPROTO_UDP, len(data) + 8)
		udp = encapsulate_udp(source_port, destination_port, data,
			pseudoheader=pseudoheader)
		ipv4 = encapsulate_ipv4(source_ip, BROADCAST_IP, IPPROTO_UDP, udp,
			identification=self.session.next_identification(),
			flags=IPV4_FLAG_DONT_FRAGMENT)
		return encapsulate_ethernet(source_mac, destination_mac,
			IPV4_ETHERTYPE, ipv4)

	def send(self, fields, options, *, from_client, destination_mac):
		"""Encode, frame and record one message.

		A precondition violation stops the transaction; nothing is recorded
		for the failed message.

		"""
		self.check()
		try:
			fields = MessageOptions.coerce(options).apply(fields)
			data = encode_message(fields)
			frame = self.frame(data, from_client=from_client,
				destination_mac=destination_mac)
		except EncodeError as e:
			self.aborted = True
			self.logger.error('%#010x - transaction stopped (caused by %s)',
				self.id, e)
			raise

		self.session.emit(frame)
		self.logger.debug('%#010x - %s, %d bytes', self.id,
			get_message_type(fields.options[OptionType.DHCP_MESSAGE_TYPE]).name,
			len(data))
		return data

	def discover(self, options=None):
		fields = self.fields(MessageType.DISCOVER, op=Operation.REQUEST,
			broadcast=True, siaddr=NULL_IP)
		return self.send(fields, options, from_client=True,
			destination_mac=BROADCAST_MAC)

	def offer(self, offered_ip_address, lease_time, options=None):
		fields = self.fields(MessageType.OFFER, op=Operation.REPLY,
			yiaddr=offered_ip_address, options={
				OptionType.IP_ADDRESS_LEASE_TIME: lease_time,
				OptionType.DHCP_SERVER: self.server_ip
			})
		return self.send(fields, options, from_client=False,
			destination_mac=self.client_mac)

	def request(self, requested_ip_address, options=None):
		fields = self.fields(MessageType.REQUEST, op=Operation.REQUEST,
			options={
				OptionType.REQUESTED_IP_ADDRESS: requested_ip_address,
				OptionType.DHCP_SERVER: self.server_ip
			})
		return self.send(fields, options, from_client=True,
			destination_mac=self.server_mac)

	def ack(self, accepted_ip_address, lease_time, options=None):
		fields = self.fields(MessageType.ACK, op=Operation.REPLY,
			yiaddr=accepted_ip_address, options={
				OptionType.IP_ADDRESS_LEASE_TIME: lease_time,
				OptionType.DHCP_SERVER: self.server_ip
			})
		return self.send(fields, options, from_client=False,
			destination_mac=self.client_mac)

	def nak(self, options=None):
		fields = self.fields(MessageType.NAK, op=Operation.REPLY)
		return self.send(fields, options, from_client=False,
			destination_mac=self.client_mac)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
