"""Trade execution and portfolio ledger."""

__version__ = "0.1.0"
