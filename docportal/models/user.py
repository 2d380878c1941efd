"""
Session Role Module

The portal has exactly two roles. The administrator is a single configured
credential; every other session belongs to a Client record.
"""
from enum import Enum


class UserRole(str, Enum):
    """
    Enumeration of session roles.

    - ADMIN: the configured administrator, unrestricted visibility
    - CLIENT: a logged-in client, sees its own documents plus any shared with it
    """
    ADMIN = "admin"
    CLIENT = "client"
