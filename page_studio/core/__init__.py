"""Core : identifiants, schémas, invariants, sanitization, layout."""
