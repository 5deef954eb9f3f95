"""
Pydantic schema definitions for API payloads.

Each domain (accounts, songs) defines its own Pydantic models for
request and response bodies.  Schemas are separated from the store's
record types to decouple API representation from storage.
"""
