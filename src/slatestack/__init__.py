"""Slatestack - headless content backend.

Collections define their field schemas at runtime; entries store
schema-validated data with generated slugs and manual ordering.
"""

__version__ = "0.1.0"
