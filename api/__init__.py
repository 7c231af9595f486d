"""
api — HTTP routers (users, articles, health) and app-level middleware.
"""
