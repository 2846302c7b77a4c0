"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Aggregates, ImportResult, ViewState)
- task_store.py: ordered in-memory list + mutations + aggregates
- persistence.py: task list <-> JSON document in a key-value backend
- query.py: search / field filters (read-only views)
- codec.py: JSON import/export with deduplication
- task_api.py: small high-level helpers (points estimate, progress)
"""
