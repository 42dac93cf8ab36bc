"""Cycle calendar engine and aggregation."""
