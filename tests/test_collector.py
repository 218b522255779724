#!/usr/bin/env python3
"""Tests for finder/collector.py — ranking, capping and early exit"""

import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from finder.collector import CategoryCollector, rank_records
from finder.dedup import DedupSet
from finder.models import EntityRecord
from finder.resolver import CandidateResolver


def _record(imdb_id, rating):
    return EntityRecord(title=imdb_id, year='2000', imdb_id=imdb_id, imdb_rating=rating)


@pytest.fixture
def executor():
    with ThreadPoolExecutor(max_workers=4) as pool:
        yield pool


class TestRankRecords:

    def test_descending_by_score(self):
        ranked = rank_records([_record('a', '5.0'), _record('b', '9.1'), _record('c', '7.3')], 10)
        assert [r.imdb_id for r in ranked] == ['b', 'c', 'a']

    def test_ties_keep_discovery_order(self):
        ranked = rank_records([_record('a', '7.0'), _record('b', '8.0'),
                               _record('c', '7.0'), _record('d', '7.0')], 10)
        assert [r.imdb_id for r in ranked] == ['b', 'a', 'c', 'd']

    def test_cap_applies_after_ranking(self):
        """The best-scored record is kept even when discovered last"""
        records = [_record(f"tt{i}", '5.0') for i in range(5)] + [_record('best', '9.9')]
        ranked = rank_records(records, 3)
        assert len(ranked) == 3
        assert ranked[0].imdb_id == 'best'

    def test_unusable_scores_are_dropped(self):
        ranked = rank_records([_record('a', 'N/A'), _record('b', '6.0')], 10)
        assert [r.imdb_id for r in ranked] == ['b']

    def test_axis_label_is_attached(self):
        ranked = rank_records([_record('a', '6.0')], 10, axis='Genre')
        assert ranked[0].axis == 'Genre'


class TestCollect:

    def test_collects_across_terms_and_dedups(self, fake_omdb, make_movie, executor):
        client = fake_omdb(
            movies=[make_movie(f"tt{i}", f"M{i}", f"{i}.0") for i in range(1, 7)],
            searches={'a': [['tt1', 'tt2', 'tt3']], 'b': [['tt3', 'tt4', 'tt5', 'tt6']]},
        )
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=2)
        resolver = CandidateResolver(client, DedupSet())

        results = collector.collect(['a', 'b'], 10, resolver)

        ids = [r.imdb_id for r in results]
        assert ids == ['tt6', 'tt5', 'tt4', 'tt3', 'tt2', 'tt1']
        assert len(ids) == len(set(ids))

    def test_cap(self, fake_omdb, make_movie, executor):
        client = fake_omdb(
            movies=[make_movie(f"tt{i}", f"M{i}", f"{i}.0") for i in range(1, 9)],
            searches={'a': [[f"tt{i}" for i in range(1, 9)]]},
        )
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=4)

        results = collector.collect(['a'], 3, CandidateResolver(client, DedupSet()))

        assert [r.imdb_id for r in results] == ['tt8', 'tt7', 'tt6']

    def test_early_exit_stops_paging(self, fake_omdb, make_movie, executor):
        ids_a = [f"a{i}" for i in range(10)]
        ids_b = [f"b{i}" for i in range(10)]
        client = fake_omdb(
            movies=[make_movie(i, i, '6.5') for i in ids_a + ids_b],
            searches={'a': [ids_a], 'b': [ids_b]},
        )
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=4)
        dedup = DedupSet()

        results = collector.collect(['a', 'b'], 5, CandidateResolver(client, dedup),
                                    early_exit=True)

        assert len(results) == 5
        assert ('b', 1) not in client.search_calls
        # Nothing beyond the limit is claimed, so later axes can still use it
        assert len(dedup) == 5

    def test_empty_terms_make_no_calls(self, fake_omdb, executor):
        client = fake_omdb()
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=4)
        assert collector.collect([], 5, CandidateResolver(client, DedupSet())) == []
        assert client.search_calls == []

    def test_crashing_resolution_is_skipped(self, fake_omdb, make_movie, executor):
        client = fake_omdb(
            movies=[make_movie('tt1', 'One', '7.0'), make_movie('tt2', 'Two', '8.0')],
            searches={'a': [['tt1', 'tt2']]},
        )
        original = client.resolve_entity

        def flaky(title=None, imdb_id=None):
            if imdb_id == 'tt1':
                raise RuntimeError('bad payload')
            return original(title=title, imdb_id=imdb_id)

        client.resolve_entity = flaky
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=4)

        results = collector.collect(['a'], 5, CandidateResolver(client, DedupSet()))

        assert [r.imdb_id for r in results] == ['tt2']


class TestEarlyExitRanking:
    """Early exit keeps the best records fetched, not the first ones"""

    def test_late_high_score_in_same_batch_wins(self, fake_omdb, make_movie, executor):
        ids = [f"a{i}" for i in range(5)] + ['best']
        client = fake_omdb(
            movies=[make_movie(i, i, '5.0') for i in ids[:5]] + [make_movie('best', 'Best', '9.9')],
            searches={'Action': [ids]},
        )
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=8)
        dedup = DedupSet()

        results = collector.collect(['Action'], 5, CandidateResolver(client, dedup),
                                    early_exit=True)

        assert [r.imdb_id for r in results] == ['best', 'a0', 'a1', 'a2', 'a3']
        assert 'a4' not in dedup
        assert 'best' in dedup

    def test_top_scores_among_everything_fetched(self, fake_omdb, make_movie, executor):
        ratings = {'m1': '5.0', 'm2': '6.0', 'm3': '9.0', 'm4': '7.0', 'm5': '8.0'}
        client = fake_omdb(
            movies=[make_movie(i, i, r) for i, r in ratings.items()],
            searches={'a': [list(ratings)]},
        )
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=2)

        results = collector.collect(['a'], 3, CandidateResolver(client, DedupSet()),
                                    early_exit=True)

        # Two batches reach the limit; m5 is never fetched
        assert 'm5' not in client.resolve_calls
        assert [r.imdb_id for r in results] == ['m3', 'm4', 'm2']

    def test_without_early_exit_same_answer_as_full_ranking(self, fake_omdb, make_movie, executor):
        ratings = {'m1': '5.0', 'm2': '6.0', 'm3': '9.0', 'm4': '7.0', 'm5': '8.0'}
        client = fake_omdb(
            movies=[make_movie(i, i, r) for i, r in ratings.items()],
            searches={'a': [list(ratings)]},
        )
        collector = CategoryCollector(client, executor, max_pages=1, batch_size=2)

        results = collector.collect(['a'], 3, CandidateResolver(client, DedupSet()))

        assert [r.imdb_id for r in results] == ['m3', 'm5', 'm4']
