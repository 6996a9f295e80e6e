"""Shared helpers for Witcher Alchemy."""
