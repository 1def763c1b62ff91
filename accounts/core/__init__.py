"""
Core utilities shared across the account service.

This package hosts configuration, logging setup, password hashing and the
error/response carriers used by services and routers alike. Nothing here
depends on the storage layer.
"""
