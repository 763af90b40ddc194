"""
Utility functions module.

Time handling shared by the ledger and the notification sinks. All
timestamps are timezone-aware UTC.
"""
