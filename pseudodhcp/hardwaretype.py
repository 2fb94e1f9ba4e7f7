# SPDX-License-Identifier: MIT

import enum

# NOTE: hardware types come from RFC 1700, see also
# https://www.iana.org/assignments/arp-parameters/arp-parameters.xhtml

@enum.unique
class HardwareType(enum.IntEnum):
	ETHERNET = 1
	EXPERIMENTAL_ETHERNET = 2
	AMATEUR_RADIO = 3
	TOKEN_RING = 4
	CHAOS = 5
	IEEE802 = 6
	ARCNET = 7
	HYPERCHANNEL = 8
	LANSTAR = 9


# hardware address length for Ethernet and 802.11
ETHERNET_ADDRESS_LENGTH = 6

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
