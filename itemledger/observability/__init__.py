"""Logging and metrics for itemledger."""
