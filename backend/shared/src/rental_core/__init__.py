"""Shared domain package for the rental booking backend.

Holds the pricing and availability engines, their data models, the
DynamoDB adapter for the rule and blocked-date stores, and logging helpers.
"""

__version__ = "0.1.0"
