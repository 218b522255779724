#!/usr/bin/env python3
"""
Candidate resolution and filtering

A search hit only carries an id and a title. The resolver fetches the full
record and decides whether it may enter a result list:

1. id already accepted in this request → rejected (duplicate)
2. id is the seed movie of a relation search → rejected (seed)
3. provider lookup fails for any reason → rejected (provider_error)
4. rating is "N/A" → rejected (no_rating)
5. rating is not a finite number → rejected (malformed_rating)
6. category search and no genre matches → rejected (genre_mismatch)
7. id claimed in the DedupSet → accepted

Rejections are counted, never raised.
"""

import logging
import threading
from collections import defaultdict
from typing import Optional, Dict

from finder.constants import UNAVAILABLE
from finder.dedup import DedupSet
from finder.errors import ProviderError
from finder.models import EntityRecord, SearchCandidate, parse_score

logger = logging.getLogger(__name__)


class CandidateResolver:
    """Resolve search candidates to full records and filter them"""

    def __init__(self, client, dedup: DedupSet,
                 exclude_id: Optional[str] = None,
                 category: Optional[str] = None):
        self.client = client
        self.dedup = dedup
        self.exclude_id = exclude_id
        self.category = category
        self.stats = defaultdict(int)
        self._stats_lock = threading.Lock()

    def _reject(self, reason: str, imdb_id: str) -> None:
        with self._stats_lock:
            self.stats[reason] += 1
        logger.debug(f"Rejected {imdb_id}: {reason}")
        return None

    def fetch(self, candidate: SearchCandidate) -> Optional[EntityRecord]:
        """
        Resolve a candidate and apply every filter except the final claim

        Safe to run from worker threads. Returns None on rejection.
        """
        imdb_id = candidate.imdb_id

        if imdb_id in self.dedup:
            return self._reject('duplicate', imdb_id)

        if self.exclude_id and imdb_id == self.exclude_id:
            return self._reject('seed', imdb_id)

        try:
            record = self.client.resolve_entity(imdb_id=imdb_id)
        except ProviderError as e:
            return self._reject('provider_error', f"{imdb_id} ({e})")

        if record.imdb_rating.strip() == UNAVAILABLE:
            return self._reject('no_rating', imdb_id)

        if parse_score(record.imdb_rating) is None:
            return self._reject('malformed_rating', f"{imdb_id} ({record.imdb_rating!r})")

        # OMDb may redirect an id; the resolved id is the one that counts
        if self.exclude_id and record.imdb_id == self.exclude_id:
            return self._reject('seed', imdb_id)

        if self.category is not None and not record.has_genre(self.category):
            return self._reject('genre_mismatch', imdb_id)

        return record

    def accept(self, record: EntityRecord) -> bool:
        """Claim the record's id for this request. False means duplicate."""
        if not self.dedup.claim(record.imdb_id):
            self._reject('duplicate', record.imdb_id)
            return False
        with self._stats_lock:
            self.stats['accepted'] += 1
        return True

    def get_stats(self) -> Dict[str, int]:
        with self._stats_lock:
            return dict(self.stats)
