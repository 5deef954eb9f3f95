"""
Service layer abstraction.

Each service encapsulates business logic for a domain and works only
through the ``RecordStore`` it is constructed with.  The song filter
is a pure helper used by clients to narrow an owner's collection for
display.
"""
