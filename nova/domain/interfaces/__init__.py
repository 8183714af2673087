"""Domain Interfaces (Ports):

Defines the contracts (Abstract Base Classes) that infrastructure components
must implement. The cache orchestrator depends on these interfaces, not on
concrete storage adapters.
"""
