#!/usr/bin/env python3
"""
Lazy candidate stream over OMDb search pages

Pages are fetched only when the consumer asks for more candidates, so a
collector that already has enough results simply stops iterating (or closes
the generator) and no further requests are made.
"""

import logging
from typing import Callable, Iterable, Iterator, Optional

from finder.constants import OMDB_PAGE_SIZE
from finder.errors import NoMoreResults, TransportError
from finder.models import SearchCandidate

logger = logging.getLogger(__name__)


def iter_candidates(client, terms: Iterable[str], max_pages: int,
                    axis: Optional[str] = None,
                    should_stop: Optional[Callable[[], bool]] = None) -> Iterator[SearchCandidate]:
    """
    Yield search candidates for each term, page by page

    Per term, paging ends when max_pages is reached, the provider reports no
    more matches, or a page comes back short. A transport failure skips that
    page only. should_stop is checked before every page request.

    Args:
        client: object with search_page(term, page, axis=None)
        terms: query terms, visited in order
        max_pages: upper bound on pages per term
        axis: label attached to every candidate (relation search)
        should_stop: predicate that ends the whole stream when true
    """
    for term in terms:
        term = term.strip()
        if not term:
            continue

        for page in range(1, max_pages + 1):
            if should_stop is not None and should_stop():
                logger.debug(f"Candidate stream stopped before '{term}' page {page}")
                return

            try:
                candidates = client.search_page(term, page, axis=axis)
            except NoMoreResults:
                break
            except TransportError as e:
                logger.debug(f"Skipping '{term}' page {page}: {e}")
                continue

            yield from candidates

            if len(candidates) < OMDB_PAGE_SIZE:
                break
