"""
Persistence adapters.

These modules encapsulate how accounts and follow relationships are stored.
Services depend on the repository instead of opening sessions themselves.
"""
