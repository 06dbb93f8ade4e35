"""tasktrack — per-user project and task tracker over HTTP.

Users register, log in, and manage their own projects and tasks.
Every read and write is scoped to the identity carried by the bearer
token; nothing is shared across users.
"""

__version__ = "0.1.0"
