#!/usr/bin/env python3
"""Shared fixtures: a deterministic in-memory stand-in for the OMDb client."""

import sys
import threading
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from finder.config import FinderConfig
from finder.errors import NotFound, NoMoreResults, TransportError
from finder.models import EntityRecord, SearchCandidate


def movie(imdb_id, title, rating, genre='Drama', director='N/A', actors='N/A', year='2000'):
    """OMDb-shaped ?i= payload"""
    return {
        'Title': title,
        'Year': year,
        'Genre': genre,
        'Director': director,
        'Actors': actors,
        'Plot': f"Plot of {title}",
        'imdbID': imdb_id,
        'imdbRating': rating,
        'Response': 'True',
    }


class FakeOMDb:
    """
    Deterministic provider stub

    movies:   {imdb_id: payload}
    searches: {term: [[ids on page 1], [ids on page 2], ...]}
    """

    def __init__(self, movies=None, searches=None, failing_ids=(), failing_pages=()):
        self.movies = {m['imdbID']: m for m in (movies or [])}
        self.searches = searches or {}
        self.failing_ids = set(failing_ids)
        self.failing_pages = set(failing_pages)
        self.search_calls = []
        self.resolve_calls = []
        self._lock = threading.Lock()

    def resolve_entity(self, title=None, imdb_id=None):
        with self._lock:
            self.resolve_calls.append(title or imdb_id)
        if imdb_id in self.failing_ids or title in self.failing_ids:
            raise TransportError(f"timeout for {imdb_id or title}")
        if imdb_id:
            data = self.movies.get(imdb_id)
        else:
            data = next((m for m in self.movies.values() if m['Title'].lower() == title.lower()), None)
        if data is None:
            raise NotFound('Movie not found!')
        return EntityRecord.from_omdb(data)

    def search_page(self, term, page=1, axis=None):
        with self._lock:
            self.search_calls.append((term, page))
        if (term, page) in self.failing_pages:
            raise TransportError(f"timeout for '{term}' page {page}")
        pages = self.searches.get(term, [])
        if page > len(pages) or not pages[page - 1]:
            raise NoMoreResults('Movie not found!')
        return [
            SearchCandidate(
                imdb_id=i,
                title=self.movies.get(i, {}).get('Title', ''),
                axis=axis,
            )
            for i in pages[page - 1]
        ]


@pytest.fixture
def config():
    return FinderConfig(omdb_api_key='test-key', max_workers=4, max_pages=1)


@pytest.fixture
def make_movie():
    return movie


@pytest.fixture
def fake_omdb():
    return FakeOMDb
