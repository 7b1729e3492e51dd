"""
Utility functions for Lambda handler operations.

This package contains reusable service functions for email composition and
template loading.
"""

__all__ = ['email', 'templates']
