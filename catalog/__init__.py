"""
Catalog module.

Shared reference data: license categories and locations (branches).
"""
