"""
Core utilities shared across the Coinboard API.

Configuration, the error hierarchy, logging setup, password hashing, the
bearer token codec and request rate limiting live here so that services and
routers depend on these primitives instead of reading the environment or
FastAPI internals directly.
"""
