"""Contactbook — a small contacts API with JWT auth.

Users sign up and log in with email/password and receive a bearer
token. The token unlocks protected routes such as adding a contact
to the MongoDB-backed contacts collection.
"""

__version__ = "0.1.0"
