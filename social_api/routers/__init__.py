"""
FastAPI routers grouped by domain (auth, accounts).
"""
