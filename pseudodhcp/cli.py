# SPDX-License-Identifier: MIT

import argparse
import logging
import sys

from .error import Error
from .sequencer import (Session, ConnectionOptions, DEFAULT_CLIENT_MAC,
	DEFAULT_SERVER_MAC)
from .transaction import DEFAULT_SEED

LOG_FORMAT = '{asctime}|{name}|{levelname}|{message}'


def configure_logging(output='-', level='INFO'):
	if isinstance(output, str):
		if output == '-':
			log_handler = logging.StreamHandler(sys.stderr)
		else:
			log_handler = logging.FileHandler(output)
	else:
		log_handler = logging.StreamHandler(output)

	log_formatter = logging.Formatter(LOG_FORMAT, style='{')
	log_handler.setFormatter(log_formatter)

	logger = logging.Logger(__package__)
	logger.addHandler(log_handler)

	logger.setLevel(level)

	return logger


def write_sample(session, server_ip='192.168.1.1'):
	"""Record three exchanges: an acquired lease, a rejected request and a
	lease carrying network configuration."""
	connection = ConnectionOptions(dst_ip=server_ip)
	network = {
		'subnet_mask': '255.255.255.0',
		'router': ['192.168.1.1'],
		'domain_name_server': ['209.18.47.61', '209.18.47.62']
	}

	with session.transaction(connection) as dhcp:
		dhcp.discover()
		dhcp.offer('192.168.0.151', 84600)
		dhcp.request('192.168.0.151')
		dhcp.insert_delay(2)
		dhcp.ack('192.168.0.151', 84600)

	with session.transaction(connection) as dhcp:
		dhcp.discover()
		dhcp.offer('192.168.0.114', 48300)
		dhcp.request('192.168.0.114')
		dhcp.nak()

	with session.transaction(connection) as dhcp:
		dhcp.discover({
			'parameter_request_list': ['subnet_mask', 'router',
				'domain_name_server']
		})
		dhcp.offer('192.168.0.111', 169200, network)
		dhcp.request('192.168.0.111')
		dhcp.ack('192.168.0.111', 169200, network)

	return session


def write_capture(args, logger):
	try:
		session = Session(seed=args.seed, start_time=args.start_time,
			client_mac=args.client_mac, server_mac=args.server_mac,
			logger=logger)
		write_sample(session, server_ip=args.server_ip)
	except Error as e:
		logger.error('could not write capture (caused by %s)', e)
		return 1

	if args.output == '-':
		session.write(sys.stdout.buffer)
	else:
		session.write(args.output)
	logger.info('wrote %d packets to %s', len(session.pcap), args.output)
	return 0


def main(argv=None):
	parser = argparse.ArgumentParser(prog='pseudodhcp',
		description='write a packet capture of simulated DHCP exchanges')
	parser.add_argument('-o', '--output', default='sample.pcap',
		help='capture file to write, - for standard output')
	parser.add_argument('-s', '--seed', default=DEFAULT_SEED,
		type=lambda value: int(value, 0),
		help='seed of the transaction id generator')
	parser.add_argument('--start-time', default=None, type=int,
		help='capture start, in nanoseconds since the epoch')
	parser.add_argument('--client-mac', default=DEFAULT_CLIENT_MAC)
	parser.add_argument('--server-mac', default=DEFAULT_SERVER_MAC)
	parser.add_argument('--server-ip', default='192.168.1.1')
	parser.add_argument('-f', '--log-file', default='-',
		help='location to log messages, - for standard error')
	parser.add_argument('-l', '--log-level', default='INFO', choices=('ALL',
		'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'), type=str.upper,
		help='verbosity of log messages, in descending order')
	args = parser.parse_args(argv)

	level = 0 if args.log_level == 'ALL' else getattr(logging, args.log_level)
	logger = configure_logging(output=args.log_file, level=level)

	try:
		return write_capture(args, logger)
	finally:
		for handler in list(logger.handlers):
			logger.removeHandler(handler)
			handler.close()


if __name__ == '__main__':
	sys.exit(main())

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
