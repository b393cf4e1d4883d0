# dirvec/logging/tags.py
"""Subsystem prefixes for log messages."""

CLI = "[CLI]"
CONFIG = "[CONFIG]"
SYNC = "[SYNC]"
LEDGER = "[LEDGER]"
VECTOR_DB = "[VECTOR_DB]"
EMBEDDING = "[EMBEDDING]"
