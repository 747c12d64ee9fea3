"""Entrypoints (inbound adapters) for dbhandle.

Process entry points decide what happens when bootstrapping fails: they
turn configuration and connection errors into a clean exit instead of a
traceback.

Dependency rule: import `dbhandle.bootstrap`; avoid importing
`dbhandle.adapters` directly.
"""
