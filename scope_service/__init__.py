"""Scope-of-operation service: resolves, labels and canonicalizes location scopes."""
