"""Domain Layer: cache entry models, storage contracts and exceptions.

Contains no I/O. The core orchestrator and the storage adapters both depend
on the definitions here.
"""
