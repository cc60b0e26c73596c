"""
Notifications module.

Expiry reminder emails sent by the periodic notification sweep.
"""
