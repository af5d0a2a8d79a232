"""
Translation proxy: hosted machine translation with per-user history.
"""

__version__ = "1.0.0"
