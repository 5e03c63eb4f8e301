"""Read folders, albums, keywords, volumes, masters and versions from Aperture libraries."""

__version__ = "0.1.0"