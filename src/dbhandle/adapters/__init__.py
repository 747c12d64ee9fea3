"""Adapters (infrastructure) for dbhandle.

Concrete bindings to the external collaborators: SQLAlchemy engines and
pools, the PyMySQL driver, shared schema metadata and the query facade.

Dependency rule: adapters never import `dbhandle.bootstrap` or
`dbhandle.entrypoints`.
"""
