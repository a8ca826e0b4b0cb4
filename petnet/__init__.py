"""Building blocks for a small user-space network stack: hashing, hash tables, JSON trees, UDP headers, UDP endpoint maps and file helpers."""

__version__ = "0.1.0"