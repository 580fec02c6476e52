#!/usr/bin/env python3
"""
CatalogManager - in-memory movie catalog with persistence and OMDb enrichment

Every mutation (add/update/delete) is followed by a full save to the store.
Ids come from a counter owned by the manager: strictly increasing, never
reused after delete. Remote calls run one at a time.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

from moviecat.errors import LoadError, NotFoundError, RemoteFetchError
from moviecat.models import Movie, SEARCH_FIELDS
from moviecat.omdb import map_detail_to_fields

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_TERM = 'star'
DEFAULT_ENRICH_LIMIT = 5


class MovieView:
    """
    Lazy, restartable view over the catalog.

    Each iteration re-scans the live movie list, so a view reflects later
    mutations and can be iterated any number of times.
    """

    def __init__(self, movies: List[Movie], predicate: Optional[Callable[[Movie], bool]] = None):
        self._movies = movies
        self._predicate = predicate

    def __iter__(self) -> Iterator[Movie]:
        for movie in self._movies:
            if self._predicate is None or self._predicate(movie):
                yield movie

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __len__(self) -> int:
        return sum(1 for _ in self)


class CatalogManager:
    """Owns the catalog for the process lifetime"""

    def __init__(self, store, provider=None,
                 search_term: str = DEFAULT_SEARCH_TERM,
                 enrich_limit: int = DEFAULT_ENRICH_LIMIT):
        self.store = store
        self.provider = provider
        self.search_term = search_term
        self.enrich_limit = enrich_limit
        self.movies: List[Movie] = []
        self.next_id = 1

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self):
        """Replace in-memory state with the stored catalog. Raises LoadError."""
        records = self.store.read()
        try:
            movies = [Movie.from_dict(record) for record in records]
        except (TypeError, AttributeError) as e:
            raise LoadError(f"Malformed movie record in catalog: {e}") from e

        self.movies = movies

        # Stored ids must never be handed out again
        highest = max((m.id for m in movies if isinstance(m.id, int)), default=0)
        if highest + 1 > self.next_id:
            self.next_id = highest + 1

        logger.info(f"Loaded {len(self.movies)} movies (next id {self.next_id})")

    def save(self):
        """Write the full catalog to the store. Raises SaveError."""
        self.store.write([movie.to_dict() for movie in self.movies])

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> MovieView:
        return MovieView(self.movies)

    def search(self, term: str) -> MovieView:
        """Case-insensitive substring match on title, director or genre"""
        needle = term.lower()

        def matches(movie: Movie) -> bool:
            for name in SEARCH_FIELDS:
                value = movie.get(name)
                if isinstance(value, str) and needle in value.lower():
                    return True
            return False

        return MovieView(self.movies, matches)

    def filter(self, field_name: str, value: Any) -> MovieView:
        """Exact equality on one field. Unknown field names match nothing."""
        def matches(movie: Movie) -> bool:
            return movie.has_field(field_name) and movie.get(field_name) == value

        return MovieView(self.movies, matches)

    def get(self, movie_id: int) -> Optional[Movie]:
        index = self._index_of(movie_id)
        return None if index == -1 else self.movies[index]

    def _index_of(self, movie_id: int) -> int:
        # Records loaded without an id are never addressable
        if movie_id is None:
            return -1
        for index, movie in enumerate(self.movies):
            if movie.id == movie_id:
                return index
        return -1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, title, director, year_of_release, genre, imdb_rating) -> Movie:
        movie = Movie(
            id=self.next_id,
            title=title,
            director=director,
            year_of_release=year_of_release,
            genre=genre,
            imdb_rating=imdb_rating,
        )
        self.next_id += 1
        self.movies.append(movie)
        self.save()
        logger.debug(f"Added movie {movie.id}: {movie.title}")
        return movie

    def update(self, movie_id: int, fields: Dict[str, Any]) -> Movie:
        """Merge fields into one movie. Raises NotFoundError for an unknown id."""
        index = self._index_of(movie_id)
        if index == -1:
            logger.warning("Movie not found.")
            raise NotFoundError(movie_id)

        movie = self.movies[index]
        movie.merge(fields)
        self.save()
        logger.info("Movie details updated successfully.")
        return movie

    def delete(self, movie_id: int) -> Movie:
        """Remove one movie. Raises NotFoundError for an unknown id."""
        index = self._index_of(movie_id)
        if index == -1:
            logger.warning("Movie not found.")
            raise NotFoundError(movie_id)

        movie = self.movies.pop(index)
        self.save()
        logger.info("Movie deleted successfully.")
        return movie

    # ------------------------------------------------------------------
    # Remote
    # ------------------------------------------------------------------

    def enrich_from_remote(self, term: Optional[str] = None, limit: Optional[int] = None) -> List[Movie]:
        """
        Add up to `limit` movies found by an OMDb search for `term`.

        Each candidate's detail is fetched by IMDb id and added. A failed
        detail fetch skips that candidate only; a failed search adds nothing.

        Returns:
            Movies added in this pass
        """
        term = term or self.search_term
        limit = self.enrich_limit if limit is None else limit
        # Negative limits would slice from the end
        limit = max(limit, 0)
        if limit == 0:
            logger.info("Enrichment limit is 0, nothing to fetch")
            return []

        try:
            candidates = self._require_provider().search(term)
        except RemoteFetchError as e:
            logger.warning(f"Error: Failed to fetch movie data. {e}")
            return []

        added = []
        for candidate in candidates[:limit]:
            imdb_id = candidate.get('imdbID') if isinstance(candidate, dict) else None
            if not imdb_id:
                logger.warning(f"Skipping search result without IMDb ID: {candidate!r}")
                continue

            try:
                detail = self.provider.fetch_by_id(imdb_id)
            except RemoteFetchError as e:
                logger.warning(f"Error: Failed to fetch movie details for IMDb ID: {imdb_id} ({e})")
                continue

            added.append(self.add(**map_detail_to_fields(detail)))

        self.save()
        logger.info(f"Fetched and added {len(added)} movies for '{term}'")
        return added

    def lookup_by_name(self, name: str) -> Optional[Dict]:
        """Raw OMDb detail for an exact title, None on failure. Never mutates the catalog."""
        try:
            data = self._require_provider().fetch_by_title(name)
        except RemoteFetchError as e:
            logger.warning(f"Error: Failed to fetch movie data. {e}")
            return None

        logger.info(f"Movie fetched successfully: {data.get('Title', name)}")
        return data

    def _require_provider(self):
        if self.provider is None:
            raise RemoteFetchError("No metadata provider configured (missing OMDb API key?)")
        return self.provider
