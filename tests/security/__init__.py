"""
Security tests for the bookmarks API.

Covers cross-user access (IDOR) and bearer token enforcement. Bookmark ids
are sequential, so every route must behave the same for another user's id
as for an id that does not exist.
"""
