"""
Revenue leakage dashboard core.
Normalizes and reconciles agent tool-call events into the dashboard's record collections.
"""

__version__ = "1.0.0"
