# SPDX-License-Identifier: MIT

__all__ = ['Error', 'EncodeError', 'ConfigurationError', 'TransactionError']


class Error(Exception):
	"""Base class for pseudodhcp errors"""
	pass


class EncodeError(Error, ValueError):
	"""A value breaks a fixed-width or enumeration constraint of the codec"""
	pass


class ConfigurationError(Error, ValueError):
	"""Invalid session or connection configuration"""
	pass


class TransactionError(Error):
	"""Operation on a transaction that has been stopped"""
	pass

# vim:set ft=python ts=4 sw=4 ai noet cc=80:
