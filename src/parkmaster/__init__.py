"""
Park Master
Record store and lifecycle services for a parking facility
"""

__version__ = "1.0.0"
