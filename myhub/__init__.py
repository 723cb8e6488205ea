"""
MyHub - Personal Organizer Core

Storage and domain-service layer for a single-user organizer that combines
a password vault, a weekly routine planner and a budget tracker.

DESIGN PRINCIPLES:
1. All state lives in a local key-value store
2. Storage is injected, never a hidden global
3. Validation happens before any write
4. Reads degrade gracefully, writes fail loudly
"""

__version__ = "1.0.0"
__author__ = "MyHub Team"
