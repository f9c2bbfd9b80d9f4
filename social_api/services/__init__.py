"""
High-level use cases for the social graph API.

Each service module orchestrates the repository and core primitives to
implement business rules (signup, login, owner-only updates, follows).

Routers (FastAPI endpoints) call these services instead of opening database
sessions directly.
"""
