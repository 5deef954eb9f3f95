"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules: ``core`` (configuration, logging, errors, identity
helpers and the in-memory record store), ``schemas`` (API payloads),
``services`` (business logic) and ``api`` (versioned routers).

The ASGI application lives in ``main``; it is not imported here so
that clients can use the schemas and the song filter without building
a server::

    uvicorn song_catalog_api.app.main:app --reload
"""
