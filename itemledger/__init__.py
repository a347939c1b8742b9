"""itemledger: item records and audit history over an ordered key-value ledger."""

__version__ = "0.1.0"
