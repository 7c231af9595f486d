"""
auth — User authentication module.

Provides:
  • JWT token creation & verification (``TokenService``)
  • Password hashing (bcrypt)
  • Register / Login / Me API routes
  • ``require_auth_user`` / ``optional_auth_user`` FastAPI dependencies
"""
