"""
Core utilities shared across the employees API.

This package hosts:
- configuration helpers (env vars, data file path)
- logging setup and the request logging middleware
- process lifecycle helpers (the exactly-once shutdown hook)

Routers and services depend on these primitives instead of reading the
environment or installing handlers themselves.
"""
