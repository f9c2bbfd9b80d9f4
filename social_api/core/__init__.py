"""
Core utilities shared across the social graph API.

This package hosts:
- configuration helpers (env vars, secrets, feature flags)
- cross-cutting services such as logging, the error taxonomy and the
  password hashing primitives.

Routers and services depend on these primitives instead of reading
os.environ or configuring handlers on their own.
"""
