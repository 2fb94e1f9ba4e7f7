# SPDX-License-Identifier: MIT

import pytest

from pseudodhcp.sequencer import Session

START_TIME = 1700000000*1000000000
CLIENT_MAC = b'\x02\x00\x00\x00\x00\x01'


@pytest.fixture
def start_time():
	return START_TIME


@pytest.fixture
def client_mac():
	return CLIENT_MAC


@pytest.fixture
def session(start_time):
	return Session(seed=0xCAFE, start_time=start_time)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
