"""itemledger command-line interface.

Exposes:
    cli -- Click group entry point (registered as ``itemledger`` script).
"""

from itemledger.cli.main import cli

__all__ = ["cli"]
