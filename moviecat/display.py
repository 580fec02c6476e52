#!/usr/bin/env python3
"""Console rendering for catalog listings"""

from typing import Iterable, List

from moviecat.models import Movie


def format_movie(movie: Movie) -> str:
    """One block per movie, followed by a blank line"""
    return (
        f"ID: {movie.id}\n"
        f"Title: {movie.title}\n"
        f"Director: {movie.director}\n"
        f"Year of Release: {movie.year_of_release}\n"
        f"Genre: {movie.genre}\n"
        f"IMDb Rating: {movie.imdb_rating}\n"
    )


def section_header(label: str) -> str:
    return f"\n===== {label} ====="


def render_movies(header: str, movies: Iterable[Movie], empty_message: str) -> str:
    blocks: List[str] = [format_movie(movie) for movie in movies]
    if not blocks:
        return empty_message
    return "\n".join([section_header(header)] + blocks)


def render_catalog(movies: Iterable[Movie]) -> str:
    return render_movies("Movie Catalog", movies, "No movies in catalog.")


def render_search(term: str, movies: Iterable[Movie]) -> str:
    return render_movies(
        f'Search Results for "{term}"', movies,
        f'No movies found for "{term}".'
    )


def render_filter(field_name: str, value, movies: Iterable[Movie]) -> str:
    return render_movies(
        f"Filtered Movies ({field_name}: {value})", movies,
        f"No movies found for the given {field_name}: {value}."
    )


def render_added(movies: Iterable[Movie]) -> str:
    return render_movies("Added Movies", movies, "No movies were added.")
