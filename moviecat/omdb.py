#!/usr/bin/env python3
"""
OMDb API client

Three lookups are used by the catalog:
  ?s=<term>   search, returns candidates carrying imdbID
  ?i=<id>     full detail by IMDb id
  ?t=<title>  full detail by exact title

Every failure (network, timeout, HTTP status, bad JSON, API-reported error)
is raised as RemoteFetchError. No retries, no caching.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from moviecat.errors import RemoteFetchError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://www.omdbapi.com/"


class OMDbClient:
    """Interface to the Open Movie Database API"""

    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout: float = 10):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def search(self, term: str) -> List[Dict]:
        """Search by free text, return the candidate list"""
        data = self._query({'s': term}, f"search '{term}'")
        results = data.get('Search')
        if not isinstance(results, list):
            raise RemoteFetchError(f"OMDb search '{term}' returned no result list")
        logger.debug(f"OMDb search '{term}': {len(results)} candidates")
        return results

    def fetch_by_id(self, imdb_id: str) -> Dict:
        """Full detail payload for an IMDb id"""
        return self._query({'i': imdb_id}, f"IMDb ID: {imdb_id}")

    def fetch_by_title(self, title: str) -> Dict:
        """Full detail payload for an exact title"""
        return self._query({'t': title}, f"title '{title}'")

    def _query(self, params: Dict[str, str], label: str) -> Dict:
        """Make the API request and unwrap OMDb's error convention"""
        params = dict(params, apikey=self.api_key)

        try:
            response = requests.get(
                self.base_url,
                params=params,
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            raise RemoteFetchError(f"OMDb API timeout for {label}") from e
        except requests.exceptions.HTTPError as e:
            raise RemoteFetchError(f"OMDb API HTTP error for {label}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise RemoteFetchError(f"OMDb API request failed for {label}: {e}") from e
        except ValueError as e:
            raise RemoteFetchError(f"OMDb API returned invalid JSON for {label}") from e

        if not isinstance(data, dict):
            raise RemoteFetchError(f"OMDb API returned unexpected payload for {label}")

        # OMDb signals failure in-band: {"Response": "False", "Error": "..."}
        if data.get('Error') or data.get('Response') == 'False':
            raise RemoteFetchError(
                f"OMDb error for {label}: {data.get('Error', 'Unknown error')}"
            )

        return data


def _clean(value: Any) -> Any:
    """OMDb uses the string 'N/A' for missing values"""
    if value == 'N/A':
        return None
    return value


def _parse_rating(value: Any) -> Optional[float]:
    value = _clean(value)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def map_detail_to_fields(detail: Dict) -> Dict[str, Any]:
    """Map an OMDb detail payload to Movie add() arguments"""
    return {
        'title': _clean(detail.get('Title')),
        'director': _clean(detail.get('Director')),
        'year_of_release': _clean(detail.get('Year')),
        'genre': _clean(detail.get('Genre')),
        'imdb_rating': _parse_rating(detail.get('imdbRating')),
    }
