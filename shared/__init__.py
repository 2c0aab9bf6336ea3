"""
Shared code for the record showcase services

Common schemas and utilities used by the API, render and edge services.
"""

__version__ = "1.0.0"
