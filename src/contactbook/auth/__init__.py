"""Authentication.

Learn: Users sign up with email/password (bcrypt digest kept in an
in-memory credential store), log in to receive a JWT access token,
and present it as ``Authorization: Bearer <token>``. The auth gate
verifies the token and resolves its subject back to a known user.
"""
