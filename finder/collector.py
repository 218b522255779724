#!/usr/bin/env python3
"""
Per-axis collection and ranking

A CategoryCollector walks the candidate stream for one list of terms,
resolves hits on a worker pool and ranks whatever survived the filters.
Records are pooled in discovery order regardless of which worker
finishes first, so equal scores keep a stable order between runs.
"""

import logging
from concurrent.futures import Executor
from itertools import islice
from typing import Iterable, List, Optional

from finder.models import EntityRecord, RankedResult
from finder.resolver import CandidateResolver
from finder.stream import iter_candidates

logger = logging.getLogger(__name__)


def rank_records(records: Iterable[EntityRecord], limit: int,
                 axis: Optional[str] = None) -> List[RankedResult]:
    """
    Sort records by score descending and keep the first `limit`

    The sort is stable: equal scores stay in discovery order. Records without
    a usable score are dropped.
    """
    results = [
        RankedResult.from_record(record, axis=axis)
        for record in records
        if record.score is not None
    ]
    results.sort(key=lambda r: r.score, reverse=True)
    return results[:limit]


class CategoryCollector:
    """Collect, rank and cap candidates for one axis"""

    def __init__(self, client, executor: Executor, max_pages: int, batch_size: int):
        self.client = client
        self.executor = executor
        self.max_pages = max_pages
        self.batch_size = max(1, batch_size)

    def collect(self, terms: List[str], limit: int, resolver: CandidateResolver,
                axis: Optional[str] = None, early_exit: bool = False) -> List[RankedResult]:
        """
        Gather records for `terms` and return the top `limit`

        Every record that passes the filters joins the pool, including the
        rest of the batch in flight when the limit is reached. The pool is
        ranked and ids are claimed in rank order until `limit` are held, so
        movies ranked below the cut stay available to later axes.

        With early_exit, paging stops once the pool holds `limit` records;
        otherwise every configured page is examined.
        """
        pool: List[EntityRecord] = []
        pooled_ids = set()

        def enough() -> bool:
            return early_exit and len(pool) >= limit

        stream = iter_candidates(
            self.client, terms, self.max_pages,
            axis=axis, should_stop=enough,
        )
        seen_in_stream = 0
        try:
            while not enough():
                batch = list(islice(stream, self.batch_size))
                if not batch:
                    break
                seen_in_stream += len(batch)

                futures = [self.executor.submit(resolver.fetch, candidate) for candidate in batch]
                for future in futures:
                    try:
                        record = future.result()
                    except Exception as e:
                        logger.error(f"Candidate resolution crashed: {type(e).__name__}: {e}")
                        continue
                    if record is None:
                        continue
                    if record.imdb_id in pooled_ids:
                        logger.debug(f"Rejected {record.imdb_id}: duplicate within {axis or 'category'}")
                        continue
                    pooled_ids.add(record.imdb_id)
                    pool.append(record)
        finally:
            stream.close()

        accepted: List[EntityRecord] = []
        for record in sorted(pool, key=lambda r: r.score, reverse=True):
            if len(accepted) >= limit:
                break
            if resolver.accept(record):
                accepted.append(record)

        ranked = rank_records(accepted, limit, axis=axis)
        logger.info(
            f"{axis or 'Category'} terms={terms}: {seen_in_stream} candidates, "
            f"{len(pool)} passed filters, {len(ranked)} kept"
        )
        return ranked
