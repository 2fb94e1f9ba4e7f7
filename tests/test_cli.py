# SPDX-License-Identifier: MIT

import io
import logging

from scapy.layers.dhcp import BOOTP, DHCP
from scapy.utils import rdpcap

from pseudodhcp.cli import configure_logging, main, write_sample
from pseudodhcp.sequencer import Session


def message_types(packets):
	return [
		{
			option[0]: option[1]
			for option in packet[DHCP].options
			if isinstance(option, tuple)
		}['message-type']
		for packet in packets
	]


def test_sample_exchanges(start_time):
	session = write_sample(Session(start_time=start_time))
	assert len(session.pcap) == 12


def test_main_writes_capture(tmp_path, start_time):
	output = tmp_path/'sample.pcap'
	log_file = tmp_path/'log.txt'
	status = main(['-o', str(output), '-s', '0xCAFE', '--start-time',
		str(start_time), '-f', str(log_file), '-l', 'DEBUG'])
	assert status == 0

	packets = rdpcap(str(output))
	assert message_types(packets) == [1, 2, 3, 5, 1, 2, 3, 6, 1, 2, 3, 5]
	assert len({packet[BOOTP].xid for packet in packets}) == 3
	assert packets[3][BOOTP].secs == 2

	log = log_file.read_text()
	assert 'transaction started' in log
	assert 'wrote 12 packets' in log


def test_main_is_reproducible(tmp_path, start_time):
	outputs = []
	for name in ('a.pcap', 'b.pcap'):
		output = tmp_path/name
		main(['-o', str(output), '--start-time', str(start_time), '-f',
			str(tmp_path/'log.txt')])
		outputs.append(output.read_bytes())
	assert outputs[0] == outputs[1]


def test_main_rejects_bad_mac(tmp_path):
	status = main(['-o', str(tmp_path/'x.pcap'), '--client-mac', 'nope',
		'-f', str(tmp_path/'log.txt')])
	assert status == 1
	assert not (tmp_path/'x.pcap').exists()


def test_configure_logging_stream():
	stream = io.StringIO()
	logger = configure_logging(output=stream, level=logging.INFO)
	try:
		logger.info('hello')
	finally:
		for handler in list(logger.handlers):
			logger.removeHandler(handler)
	assert stream.getvalue().endswith('|pseudodhcp|INFO|hello\n')


def test_main_closes_its_log_file(tmp_path, start_time, monkeypatch):
	handlers = []
	original = configure_logging

	def recording_configure_logging(*args, **kwargs):
		logger = original(*args, **kwargs)
		handlers.extend(logger.handlers)
		return logger

	monkeypatch.setattr('pseudodhcp.cli.configure_logging',
		recording_configure_logging)
	main(['-o', str(tmp_path/'a.pcap'), '--start-time', str(start_time),
		'-f', str(tmp_path/'log.txt')])
	file_handler, = handlers
	assert file_handler.stream is None

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
