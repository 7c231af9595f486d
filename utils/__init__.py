"""
utils — errors, pagination, response envelope, and request/response schemas.
"""
