"""
Noospace - a small journaling feed client.

Entries are short inscriptions with a symbol and tags, stored in a hosted
table, shown as a chronological scroll or a decorative spiral.
"""

__version__ = "1.0.0"
