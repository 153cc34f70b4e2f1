"""
Climate Assist backend: AI advisors with deterministic fallbacks and
user-scoped records behind bearer auth.
"""

__version__ = "0.1.0"
