"""Authentication and authorization.

Learn: Users authenticate with email/password and receive a short-lived
JWT carrying {id, email}. Protected routes resolve that token back into
a CurrentIdentity, and every store operation is scoped by its id.
"""
