"""Routing — tiered pattern matching and the inverse URL builder.

Patterns are compiled and grouped into priority tiers when the table is
loaded; matching and building only walk the precomputed tiers.
"""
