"""
Licenses module - Software license tracking.

This module handles:
- License entity and expiry classification
- Status transitions and payment history
- CSV import and export
- Dashboard summaries
"""
