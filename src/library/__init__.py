"""Library server.

REST API for a library book catalog with role-based access control,
borrow/return lifecycle, and a relational persistence layer.
"""

__version__ = "0.1.0"
