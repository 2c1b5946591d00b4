"""
Use cases for the employees API.

Routers (FastAPI endpoints) call these services instead of manipulating
records or the data file directly.
"""
