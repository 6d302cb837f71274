"""Proof Pack Health Engine."""
