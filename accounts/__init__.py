"""
Accounts module.

User profiles, notification preferences and access tokens.
"""
