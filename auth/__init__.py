"""
auth — User authentication module.

Provides:
  • JWT creation & verification (PyJWT, HS256)
  • Password hashing (bcrypt)
  • Register / Login API routes backed by ``AuthService``
  • ``require_identity`` / ``optional_identity`` FastAPI dependencies
"""
