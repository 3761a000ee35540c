"""Users API service.

A FastAPI application exposing list, get, create and update operations over
a SQL ``users`` table.
"""

__version__ = "0.1.0"
