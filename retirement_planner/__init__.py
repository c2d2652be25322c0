"""Retirement projection and tax-aware withdrawal planning."""
