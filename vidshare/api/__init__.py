"""
HTTP API. The application lives in vidshare.api.app.
"""
