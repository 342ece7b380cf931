"""
Vidshare - backend for a video sharing service.

Accounts, token authentication, and video metadata with ownership,
private/public visibility and a like counter.
"""

__version__ = "0.1.0"
