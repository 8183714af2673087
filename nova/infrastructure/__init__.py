"""Infrastructure Layer: Contains concrete implementations and adapters.

Storage adapters, configuration loading, logging setup and the console UI.
"""
