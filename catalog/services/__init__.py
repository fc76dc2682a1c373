"""
Services Package

This package contains the services behind the page handlers:
- Separate from HTTP handling (routers)
- Easier to test in isolation

Current services:
- genre_store.py: Data access for genres and their books
- genres.py: Id parsing and the concurrent genre + books fetch
- cache.py: Redis caching utilities with automatic invalidation
- rate_limiter.py: Rate limiting with slowapi and Redis backend
"""
