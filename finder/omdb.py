#!/usr/bin/env python3
"""
OMDb API client

Two lookups are exposed: resolve_entity() for one full record (?t= or ?i=)
and search_page() for one page of lightweight search hits (?s=&page=).
Failures are raised as finder.errors exceptions; the client never retries.
"""

import logging
import threading
from typing import Optional, Dict, List

import requests

from finder.config import FinderConfig
from finder.errors import NotFound, NoMoreResults, TransportError
from finder.models import EntityRecord, SearchCandidate

logger = logging.getLogger(__name__)


class OMDbClient:
    """Interface to the Open Movie Database API"""

    def __init__(self, config: FinderConfig):
        self.api_key = config.omdb_api_key
        self.base_url = config.base_url
        self.timeout = config.timeout
        self._stats_lock = threading.Lock()
        self.requests_made = 0
        self.failures = 0
        self.not_found = 0

    def _count(self, counter: str):
        with self._stats_lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def _get(self, params: Dict[str, str], description: str) -> Dict:
        """Issue one GET and return the decoded JSON body"""
        query = {'apikey': self.api_key}
        query.update(params)
        self._count('requests_made')

        try:
            response = requests.get(self.base_url, params=query, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            self._count('failures')
            logger.warning(f"OMDb API timeout for {description}")
            raise TransportError(f"timeout for {description}") from e
        except requests.exceptions.HTTPError as e:
            self._count('failures')
            logger.warning(f"OMDb API HTTP error for {description}: {e}")
            raise TransportError(f"HTTP error for {description}: {e}") from e
        except requests.exceptions.RequestException as e:
            self._count('failures')
            logger.debug(f"OMDb API error for {description}: {e}")
            raise TransportError(f"request failed for {description}: {e}") from e
        except ValueError as e:
            # Body was not JSON
            self._count('failures')
            logger.debug(f"OMDb API returned undecodable body for {description}: {e}")
            raise TransportError(f"undecodable response for {description}") from e

        if not isinstance(data, dict):
            self._count('failures')
            raise TransportError(f"unexpected response shape for {description}")

        return data

    def resolve_entity(self, title: Optional[str] = None, imdb_id: Optional[str] = None) -> EntityRecord:
        """
        Fetch the full record for one movie by title or IMDb id

        Raises:
            ValueError: neither title nor imdb_id given
            NotFound: OMDb answered Response=False
            TransportError: network, HTTP or decode failure
        """
        params = {}
        if title:
            params['t'] = title
        if imdb_id:
            params['i'] = imdb_id
        if not params:
            raise ValueError("resolve_entity() needs a title or an imdb_id")

        description = f"'{title}'" if title else imdb_id
        data = self._get(params, description)

        if data.get('Response') == 'False':
            self._count('not_found')
            error = data.get('Error', 'Unknown error')
            logger.debug(f"No OMDb record for {description}: {error}")
            raise NotFound(error)

        record = EntityRecord.from_omdb(data)
        if not record.imdb_id:
            self._count('failures')
            raise TransportError(f"record without imdbID for {description}")

        logger.debug(f"OMDb: {description} → '{record.title}' ({record.year}) rating:{record.imdb_rating}")
        return record

    def search_page(self, term: str, page: int = 1, axis: Optional[str] = None) -> List[SearchCandidate]:
        """
        Fetch one page of movie search hits for a term

        Raises:
            NoMoreResults: OMDb answered Response=False (no or no more matches)
            TransportError: network, HTTP or decode failure
        """
        description = f"search '{term}' page {page}"
        data = self._get({'s': term, 'type': 'movie', 'page': str(page)}, description)

        if data.get('Response') == 'False':
            logger.debug(f"No OMDb results for {description}: {data.get('Error', 'Unknown error')}")
            raise NoMoreResults(data.get('Error', ''))

        hits = data.get('Search') or []
        candidates = [
            SearchCandidate.from_omdb(hit, axis=axis)
            for hit in hits
            if isinstance(hit, dict) and hit.get('imdbID')
        ]
        if not candidates:
            raise NoMoreResults(f"empty page for {description}")

        return candidates

    def get_stats(self) -> Dict:
        """Get request statistics"""
        with self._stats_lock:
            return {
                'requests': self.requests_made,
                'failures': self.failures,
                'not_found': self.not_found,
            }
