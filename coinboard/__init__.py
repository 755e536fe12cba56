"""Coinboard: accounts, coin reference data and comments behind a bearer-token API."""

__version__ = "0.1.0"
