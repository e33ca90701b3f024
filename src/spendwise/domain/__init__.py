"""Domain layer for spendwise application."""
