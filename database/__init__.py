"""
database — ORM models, session factory, and the users / articles stores.
"""
