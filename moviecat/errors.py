#!/usr/bin/env python3
"""
Error taxonomy for the movie catalog

LoadError / SaveError are fatal and propagate to the caller.
NotFoundError and RemoteFetchError are reported and the flow continues.
"""


class CatalogError(Exception):
    """Base class for all catalog errors"""


class LoadError(CatalogError):
    """Catalog document could not be read or parsed"""


class SaveError(CatalogError):
    """Catalog document could not be written"""


class NotFoundError(CatalogError):
    """No movie with the requested id"""

    def __init__(self, movie_id):
        super().__init__(f"Movie not found: id={movie_id}")
        self.movie_id = movie_id


class RemoteFetchError(CatalogError):
    """OMDb request failed or the API reported an error"""
