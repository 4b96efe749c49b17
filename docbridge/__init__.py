"""
docbridge - glue between a document mapper and a host web framework.

Discovers model files, derives namespaced identifiers from their paths,
loads them once, and asks every persistent document type to create its
indexes.
"""

__version__ = "0.3.0"
