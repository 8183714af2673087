"""Core Application Layer: the TTL cache orchestrator and its rules.

Connects the domain layer with the storage adapters through interfaces.
Also contains the command handler used by the CLI.
"""
