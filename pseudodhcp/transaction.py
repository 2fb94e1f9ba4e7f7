# SPDX-License-Identifier: MIT

"""Transaction identity

A session owns exactly one TransactionIdGenerator and hands it to every
Transaction it creates. The generator advances internal state on each id, so
callers sharing it between threads must serialize next_id() themselves.

"""

__all__ = ['DEFAULT_SEED', 'TransactionIdGenerator', 'Transaction',
	'elapsed_seconds']

from random import Random

from .message import MAX_SECONDS

DEFAULT_SEED = 0xCAFE
NANOSECONDS = 1000000000


class TransactionIdGenerator:
	def __init__(self, seed=DEFAULT_SEED):
		self.seed = seed
		# NOTE: Random seeded with an int gives the same sequence on every
		# run and interpreter version
		self._random = Random(seed)

	def next_id(self):
		return self._random.getrandbits(32) & 0xFFFFFFFF

	def __repr__(self):
		return '%s(seed=%#x)' % (type(self).__name__, self.seed)


def elapsed_seconds(creation_instant, now):
	"""Whole seconds between two nanosecond instants, clamped to the
	range of the 16 bit `secs` field."""
	elapsed = now//NANOSECONDS - creation_instant//NANOSECONDS
	return max(0, min(elapsed, MAX_SECONDS))


class Transaction:
	def __init__(self, generator, creation_instant):
		self.id = generator.next_id()
		self.start = creation_instant

	def elapsed_seconds(self, now):
		return elapsed_seconds(self.start, now)

	def __repr__(self):
		return '%s(id=%#010x, start=%d)' % (type(self).__name__, self.id,
			self.start)

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
