"""
High-level use cases for the Coinboard API.

Each service orchestrates the repository inside a unit of work to implement
business rules (register a user, comment on a coin, ...). Routers call these
services instead of touching the database directly.
"""
