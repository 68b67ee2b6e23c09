"""User directory.

Accounts are plain ``django.contrib.auth`` users; the booking engine only
needs to resolve the acting username to a user row.
"""
