"""Main entry point when executing nova as a package.

This allows running the package using python -m nova.
"""

from nova.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
