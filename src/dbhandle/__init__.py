"""dbhandle

Environment-gated bootstrap of a shared, pooled MySQL database handle.
Reads the connection URI from ``DATABASE_URL``, builds one SQLAlchemy
connection pool per process and wraps it in a schema-aware query facade.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
