#!/usr/bin/env python3
"""
Test suite for catalog.py — subcommands, config loading, console output
"""

import json
import pytest
import sys
import tempfile
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog import main
from moviecat.config import DEFAULTS, load_config
from moviecat.display import format_movie, render_added, render_catalog, render_filter, render_search
from moviecat.errors import RemoteFetchError
from moviecat.models import Movie
from moviecat.store import JsonCatalogStore


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmpdir:
        p = Path(tmpdir)
        (p / 'config.yaml').write_text(
            f"catalog_path: {p / 'movies.json'}\n"
            "omdb_api_key: test-key\n"
            "enrich_limit: 2\n",
            encoding='utf-8'
        )
        yield p


def run(workdir, *argv):
    return main(['--config', str(workdir / 'config.yaml'), *argv])


def stored(workdir):
    return JsonCatalogStore(workdir / 'movies.json').read()


class TestConfig:
    """YAML config overlays defaults"""

    def test_defaults_fill_missing_keys(self, workdir):
        """Keys absent from the file take their defaults"""
        config = load_config(workdir / 'config.yaml')
        assert config['enrich_limit'] == 2
        assert config['enrich_search_term'] == DEFAULTS['enrich_search_term']
        assert config['request_timeout'] == 10

    def test_empty_file(self, workdir):
        """Empty YAML yields the defaults"""
        path = workdir / 'empty.yaml'
        path.write_text('', encoding='utf-8')
        assert load_config(path) == DEFAULTS

    def test_shipped_config_loads(self):
        """Bundled config.yaml parses"""
        config = load_config(Path(__file__).parent.parent / 'config.yaml')
        assert config['catalog_path'] == 'movies.json'
        assert config['enrich_limit'] == 5


class TestDisplay:
    """One formatted block per movie, labeled headers"""

    def test_movie_block(self):
        """Each field is printed on its own labeled line"""
        movie = Movie(id=1, title="Heat", director="Michael Mann",
                      year_of_release=1995, genre="Crime", imdb_rating=8.3)
        assert format_movie(movie).splitlines() == [
            "ID: 1",
            "Title: Heat",
            "Director: Michael Mann",
            "Year of Release: 1995",
            "Genre: Crime",
            "IMDb Rating: 8.3",
        ]

    def test_headers(self):
        """Every listing gets its own labeled header"""
        movies = [Movie(id=1, title="Heat")]
        assert "===== Movie Catalog =====" in render_catalog(movies)
        assert '===== Search Results for "heat" =====' in render_search("heat", movies)
        assert "===== Filtered Movies (genre: Crime) =====" in render_filter("genre", "Crime", movies)

    def test_empty_messages(self):
        """Empty results print a message instead of a header"""
        assert render_search("zzz", []) == 'No movies found for "zzz".'
        assert render_filter("genre", "Noir", []) == "No movies found for the given genre: Noir."
        assert render_catalog([]) == "No movies in catalog."
        assert render_added([]) == "No movies were added."


class TestLocalCommands:
    """Commands that only touch the catalog file"""

    def test_init_then_list(self, workdir, capsys):
        """Fresh catalog lists as empty"""
        assert run(workdir, 'init') == 0
        assert run(workdir, 'list') == 0
        assert "No movies in catalog." in capsys.readouterr().out

    def test_init_does_not_overwrite(self, workdir):
        """Second init keeps existing movies"""
        run(workdir, 'init')
        run(workdir, 'add', 'Heat', 'Michael Mann', '1995', 'Crime', '8.3')
        run(workdir, 'init')
        assert len(stored(workdir)) == 1

    def test_add_parses_numbers(self, workdir):
        """Year and rating arguments are stored as numbers"""
        run(workdir, 'init')
        assert run(workdir, 'add', 'Heat', 'Michael Mann', '1995', 'Crime', '8.3') == 0
        assert stored(workdir) == [{
            'id': 1, 'title': 'Heat', 'director': 'Michael Mann',
            'yearOfRelease': 1995, 'genre': 'Crime', 'imdbRating': 8.3,
        }]

    def test_ids_continue_across_invocations(self, workdir):
        """Ids keep increasing across separate runs"""
        run(workdir, 'init')
        run(workdir, 'add', 'A', 'D1', '2000', 'Drama', '8.0')
        run(workdir, 'add', 'B', 'D2', '2001', 'Real', '7.0')
        run(workdir, 'delete', '1')
        run(workdir, 'add', 'C', 'D3', '2002', 'Drama', '9.0')
        assert [(r['title'], r['id']) for r in stored(workdir)] == [('B', 2), ('C', 3)]

    def test_update_single_field(self, workdir):
        """--genre changes only the genre"""
        run(workdir, 'init')
        run(workdir, 'add', 'Heat', 'Michael Mann', '1995', 'Crime', '8.3')
        assert run(workdir, 'update', '1', '--genre', 'Crime/Drama') == 0
        record = stored(workdir)[0]
        assert record['genre'] == 'Crime/Drama'
        assert record['yearOfRelease'] == 1995

    def test_update_without_fields_fails(self, workdir):
        """update with no field options exits 1"""
        run(workdir, 'init')
        run(workdir, 'add', 'Heat', 'Michael Mann', '1995', 'Crime', '8.3')
        assert run(workdir, 'update', '1') == 1

    def test_not_found_exit_code(self, workdir):
        """Unknown id exits 1"""
        run(workdir, 'init')
        assert run(workdir, 'delete', '7') == 1
        assert run(workdir, 'update', '7', '--title', 'X') == 1

    def test_search_output(self, workdir, capsys):
        """Search prints header and matching blocks"""
        run(workdir, 'init')
        run(workdir, 'add', 'The Shawshank Redemption', 'Frank Darabont', '1994', 'Drama', '9.3')
        capsys.readouterr()
        run(workdir, 'search', 'SHAWSHANK')
        out = capsys.readouterr().out
        assert '===== Search Results for "SHAWSHANK" =====' in out
        assert "Title: The Shawshank Redemption" in out

    def test_filter_text_and_numeric(self, workdir, capsys):
        """filter compares text unless --numeric is given"""
        run(workdir, 'init')
        run(workdir, 'add', 'A', 'D1', '2000', 'Drama', '8.0')
        run(workdir, 'add', 'B', 'D2', '2001', 'Real', '7.0')
        capsys.readouterr()

        run(workdir, 'filter', 'genre', 'Drama')
        out = capsys.readouterr().out
        assert "Title: A" in out and "Title: B" not in out

        run(workdir, 'filter', 'yearOfRelease', '2001')
        assert "No movies found" in capsys.readouterr().out

        run(workdir, 'filter', 'yearOfRelease', '2001', '--numeric')
        assert "Title: B" in capsys.readouterr().out

    def test_missing_catalog_is_load_error(self, workdir):
        """Missing catalog file exits 1"""
        assert run(workdir, 'list') == 1

    def test_missing_config(self, workdir):
        """Missing config file exits 1"""
        assert main(['--config', str(workdir / 'nope.yaml'), 'list']) == 1

    def test_catalog_override(self, workdir):
        """--catalog replaces catalog_path from config"""
        other = workdir / 'other.json'
        assert run(workdir, '--catalog', str(other), 'init') == 0
        assert other.exists()
        assert not (workdir / 'movies.json').exists()


class TestRemoteCommands:
    """enrich and lookup go through OMDbClient"""

    def test_missing_api_key(self, workdir):
        """Remote commands exit 1 without an API key"""
        (workdir / 'config.yaml').write_text(
            f"catalog_path: {workdir / 'movies.json'}\n", encoding='utf-8'
        )
        run(workdir, 'init')
        assert run(workdir, 'lookup', '1917') == 1
        assert run(workdir, 'enrich') == 1

    @patch('catalog.OMDbClient')
    def test_enrich_uses_config_limit(self, mock_client_cls, workdir):
        """enrich uses enrich_limit from config"""
        client = mock_client_cls.return_value
        client.search.return_value = [{'imdbID': f'tt{i}'} for i in range(5)]
        client.fetch_by_id.side_effect = lambda imdb_id: {
            'Title': imdb_id, 'Director': 'D', 'Year': '2000', 'Genre': 'Sci-Fi', 'imdbRating': '7.0'
        }

        run(workdir, 'init')
        assert run(workdir, 'enrich') == 0
        client.search.assert_called_once_with('star')
        assert [r['title'] for r in stored(workdir)] == ['tt0', 'tt1']

    @patch('catalog.OMDbClient')
    def test_lookup_prints_payload(self, mock_client_cls, workdir, capsys):
        """lookup prints the raw payload as JSON"""
        mock_client_cls.return_value.fetch_by_title.return_value = {'Title': '1917', 'Year': '2019'}
        run(workdir, 'init')
        capsys.readouterr()

        assert run(workdir, 'lookup', '1917') == 0
        assert json.loads(capsys.readouterr().out) == {'Title': '1917', 'Year': '2019'}
        assert stored(workdir) == []

    @patch('catalog.OMDbClient')
    def test_lookup_without_catalog_file(self, mock_client_cls, workdir, capsys):
        """lookup works before init and does not create the catalog"""
        mock_client_cls.return_value.fetch_by_title.return_value = {'Title': '1917'}

        assert run(workdir, 'lookup', '1917') == 0
        mock_client_cls.return_value.fetch_by_title.assert_called_once_with('1917')
        assert json.loads(capsys.readouterr().out) == {'Title': '1917'}
        assert not (workdir / 'movies.json').exists()

    @patch('catalog.OMDbClient')
    def test_enrich_nothing_added_message(self, mock_client_cls, workdir, capsys):
        """enrich that adds nothing says so rather than calling the catalog empty"""
        mock_client_cls.return_value.search.side_effect = RemoteFetchError('Movie not found!')
        run(workdir, 'init')
        run(workdir, 'add', 'Heat', 'Michael Mann', '1995', 'Crime', '8.3')
        capsys.readouterr()

        assert run(workdir, 'enrich') == 0
        out = capsys.readouterr().out
        assert "No movies were added." in out
        assert "No movies in catalog." not in out
        assert len(stored(workdir)) == 1

    @patch('catalog.OMDbClient')
    def test_lookup_failure(self, mock_client_cls, workdir):
        """Failed lookup exits 1"""
        mock_client_cls.return_value.fetch_by_title.side_effect = RemoteFetchError('Movie not found!')
        run(workdir, 'init')
        assert run(workdir, 'lookup', 'Nope') == 1


class TestDemo:
    """demo walks every local operation"""

    def test_demo_without_api_key(self, workdir, capsys):
        """demo runs the local walkthrough without OMDb"""
        (workdir / 'config.yaml').write_text(
            f"catalog_path: {workdir / 'movies.json'}\n", encoding='utf-8'
        )
        run(workdir, 'init')
        assert run(workdir, 'demo') == 0

        out = capsys.readouterr().out
        assert '===== Search Results for "shawshank" =====' in out
        assert "No movies found for the given genre: Drama." in out
        assert stored(workdir) == [{
            'id': 1, 'title': 'The Shawshank Redemption', 'director': 'Frank Darabont',
            'yearOfRelease': 1994, 'genre': 'Crime/Drama', 'imdbRating': 9.3,
        }]
