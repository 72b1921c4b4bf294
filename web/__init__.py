"""
Web client package.

Flask application serving the Noospace page and JSON API.
"""
