"""Shared types and errors for expirytrack."""
