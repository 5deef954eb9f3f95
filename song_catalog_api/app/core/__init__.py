"""
Core infrastructure: settings, logging, the error taxonomy, identity
helpers and the in-memory record store.
"""
