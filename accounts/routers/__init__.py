"""FastAPI routers for the account service."""
