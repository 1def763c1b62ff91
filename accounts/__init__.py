"""User account service: registration, login, lookup, deletion and field updates."""
