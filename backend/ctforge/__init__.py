# backend/ctforge/__init__.py
"""CTF scenario content core: shapes, validation, lifecycle and storage."""
