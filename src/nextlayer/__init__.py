"""
nextlayer - layered search-path "next match" resolution

Finds which root of an ordered overlay stack supplies a relative resource
path, and falls through to the next lower-priority root supplying the same
path on request.
"""

__version__ = "0.2.0"
__all__ = ["__version__"]
