"""Service layer — the import walk, substitution, and plugin reconciliation.

Services may import from domain, infrastructure, and config.
"""
