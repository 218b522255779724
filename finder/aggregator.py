#!/usr/bin/env python3
"""
Top-level movie queries

find_by_category():
  Searches a fixed vocabulary of broad terms ("the", "love", ...) to build a
  large candidate pool, keeps movies whose genre list contains the category,
  and returns the best-rated ones.

find_related():
  Resolves the seed movie, then searches its genres, directors and actors as
  separate axes. One DedupSet spans all three axes, pre-seeded with the seed
  movie's own id, so a movie appears at most once in the whole answer.

Each call owns its worker pool and DedupSet; nothing is shared between calls.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from finder.collector import CategoryCollector
from finder.config import FinderConfig
from finder.constants import AXIS_GENRE, AXIS_DIRECTOR, AXIS_ACTOR, RELATION_AXES
from finder.dedup import DedupSet
from finder.errors import NotFound, ProviderError, SeedNotFound, MovieNotFound
from finder.models import EntityRecord, RankedResult, RelatedResults
from finder.resolver import CandidateResolver

logger = logging.getLogger(__name__)


class MovieFinder:
    """Aggregation and ranking engine on top of an OMDb client"""

    def __init__(self, client, config: FinderConfig):
        self.client = client
        self.config = config

    def _collector(self, executor) -> CategoryCollector:
        return CategoryCollector(
            self.client, executor,
            max_pages=self.config.max_pages,
            batch_size=self.config.max_workers,
        )

    def find_by_category(self, category: str, limit: Optional[int] = None) -> List[RankedResult]:
        """
        Best-rated movies whose genres include `category`

        Returns an empty list when nothing matches.
        """
        if not category or not category.strip():
            raise ValueError("category must be a non-empty string")
        limit = self.config.category_limit if limit is None else limit
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        logger.info(f"Category search: '{category}' (limit {limit})")
        resolver = CandidateResolver(self.client, DedupSet(), category=category)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            results = self._collector(executor).collect(
                self.config.search_seeds, limit, resolver,
                early_exit=self.config.category_early_exit,
            )

        logger.info(f"Category '{category}': {len(results)} results, filter stats {resolver.get_stats()}")
        return results

    def _resolve_seed(self, seed_title: str) -> EntityRecord:
        try:
            return self.client.resolve_entity(title=seed_title)
        except ProviderError as e:
            logger.warning(f"Seed '{seed_title}' could not be resolved: {e}")
            raise SeedNotFound(seed_title, str(e)) from e

    def find_related(self, seed_title: str, limit: Optional[int] = None) -> RelatedResults:
        """
        Movies sharing a genre, director or actor with the seed movie

        Raises:
            SeedNotFound: the seed title does not resolve
        """
        if not seed_title or not seed_title.strip():
            raise ValueError("seed_title must be a non-empty string")
        limit = self.config.related_limit if limit is None else limit
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")

        seed = self._resolve_seed(seed_title.strip())
        logger.info(
            f"Relation search for '{seed.title}' ({seed.imdb_id}): "
            f"genres={seed.genres} directors={seed.directors} actors={seed.actors}"
        )

        dedup = DedupSet([seed.imdb_id])
        axis_terms = {
            AXIS_GENRE: seed.genres,
            AXIS_DIRECTOR: seed.directors,
            AXIS_ACTOR: seed.actors,
        }

        by_axis = {}
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            collector = self._collector(executor)
            # Axes run in a fixed order so a movie found under two axes
            # always lands under the first one
            for axis in RELATION_AXES:
                resolver = CandidateResolver(self.client, dedup, exclude_id=seed.imdb_id)
                by_axis[axis] = collector.collect(
                    axis_terms[axis], limit, resolver,
                    axis=axis, early_exit=self.config.related_early_exit,
                )

        related = RelatedResults(
            seed_title=seed.title,
            by_tag=by_axis[AXIS_GENRE],
            by_contributor_a=by_axis[AXIS_DIRECTOR],
            by_contributor_b=by_axis[AXIS_ACTOR],
        )
        logger.info(f"Relation search for '{seed.title}': {len(related.all_results())} results")
        return related

    def get_movie(self, title: Optional[str] = None, imdb_id: Optional[str] = None) -> EntityRecord:
        """
        Single movie lookup by title and/or IMDb id

        Raises:
            ValueError: neither title nor imdb_id given
            MovieNotFound: provider has no such movie or could not be reached
        """
        if not title and not imdb_id:
            raise ValueError("Provide a title or an IMDb id")
        try:
            return self.client.resolve_entity(title=title, imdb_id=imdb_id)
        except NotFound as e:
            raise MovieNotFound(str(e)) from e
        except ProviderError as e:
            raise MovieNotFound(f"lookup failed: {e}") from e
