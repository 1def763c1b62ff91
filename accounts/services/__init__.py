"""
High-level use cases for the account service.

Each service orchestrates repositories to implement the business rules
(register, login, update a field, delete an account). Routers call these
services instead of touching the database directly.
"""
