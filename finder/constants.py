#!/usr/bin/env python3
"""
Shared constants for the movie finder

Single source of truth for provider sentinels, axis labels and default limits.
DO NOT duplicate these values in other modules - import from here instead.
"""

OMDB_BASE_URL = 'http://www.omdbapi.com/'

# OMDb marks missing fields (rating, director, ...) with this literal
UNAVAILABLE = 'N/A'

# OMDb search pages are fixed at 10 hits
OMDB_PAGE_SIZE = 10

# Broad, high-yield search strings used to surface a diverse candidate pool
# for category search. They are unrelated to the requested category; the
# genre match happens after each candidate is resolved.
SEARCH_SEEDS = ['the', 'a', 'love', 'man', 'girl', 'night', 'day']

# Relation axes, in the order they are collected
AXIS_GENRE = 'Genre'
AXIS_DIRECTOR = 'Director'
AXIS_ACTOR = 'Actor'
RELATION_AXES = [AXIS_GENRE, AXIS_DIRECTOR, AXIS_ACTOR]

DEFAULT_CATEGORY_LIMIT = 15
DEFAULT_RELATED_LIMIT = 5
DEFAULT_TIMEOUT = 10
DEFAULT_MAX_WORKERS = 8
DEFAULT_MAX_PAGES = 1
