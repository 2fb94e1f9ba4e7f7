"""pseudodhcp

Synthesize DHCP/BOOTP messages for packet captures, without a network

"""

__author__ = 'pseudodhcp contributors'
__version__ = '0.1.0'
__date__ = '2026-10-19'
# SPDX-License-Identifier: MIT
__license__ = 'MIT'
__copyright__ = '2026 pseudodhcp contributors'

from .error import *
from .error import __all__ as error_all
from .fields import *
from .fields import __all__ as fields_all
from .hardwaretype import HardwareType
from .optiontypes import OptionType, MessageType
from .option_codecs import Option, encode_option
from .message import Operation, Flags, OptionMap, MessageFields, encode_message
from .transaction import TransactionIdGenerator, Transaction, elapsed_seconds
from .sequencer import ConnectionOptions, MessageOptions, Session

__all__ = [
	*error_all,
	*fields_all,
	'HardwareType',
	'OptionType',
	'MessageType',
	'Option',
	'encode_option',
	'Operation',
	'Flags',
	'OptionMap',
	'MessageFields',
	'encode_message',
	'TransactionIdGenerator',
	'Transaction',
	'elapsed_seconds',
	'ConnectionOptions',
	'MessageOptions',
	'Session'
]

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
