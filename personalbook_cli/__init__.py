"""
Personal Book CLI - terminal client for the Personal Book API
"""

__version__ = "1.0.0"
