"""State layer.

Holds the app cache every bootstrap stage reads and writes, and the
one-shot channel that tells pages the cache is ready.
"""
