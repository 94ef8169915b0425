"""Main entry point when executing firstmint as a package.

This allows running the package using python -m firstmint.
"""

from firstmint.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
