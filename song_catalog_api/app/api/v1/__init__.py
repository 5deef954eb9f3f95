"""
Version 1 of the API.

This subpackage bundles the account and song endpoints of the first
public version of the Song Catalog API.
"""
