"""LinkBoard - a self-hosted personal link directory.

Serves a categorized homepage, an embedded admin editor and a small JSON API,
all backed by a single record in a key-value store.
"""

__version__ = "0.3.0"
