"""Contacts collection: schemas and repository."""
