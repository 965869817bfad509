"""
todoflow - Todo management with an optimistic client-side store.

Layers:
- core: domain entities, ordering rules and ports
- application: commands, queries, services and the mutation store
- adapters: memory, SQLite and REST API repositories, configuration
- cli: command line interface and optional terminal UI
"""

__version__ = "1.0.0"
