"""Expense tracker backend."""
