"""Bootstrap (composition root) for dbhandle.

Reads configuration, builds the connection pool and the query facade once,
and hands the result to the rest of the process: explicitly through
`bootstrap()` and `inject_dependencies()`, or through the construct-once
`LazyDatabase` behind `get_database()`.

Import rules:
- Entry points import *this* package (not adapters directly).
- This package may import `dbhandle.adapters` and `dbhandle.config`.
- Adapters must not import `dbhandle.bootstrap`.
"""

from .wiring import (
    AppContainer,
    bootstrap,
    build_database,
    inject_dependencies,
)
from .handle import LazyDatabase, get_database, shutdown

__all__ = [
    "AppContainer",
    "LazyDatabase",
    "bootstrap",
    "build_database",
    "get_database",
    "inject_dependencies",
    "shutdown",
]
