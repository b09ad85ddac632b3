"""
acres: Art Institute of Chicago API client with an IIIF Image API toolkit.
"""

__version__ = "0.1.0"
