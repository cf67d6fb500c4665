"""Exercise catalog: built-in reference data and the repository layered over it."""
