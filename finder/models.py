#!/usr/bin/env python3
"""
Data containers for the movie finder

EntityRecord is the fully resolved OMDb payload for one movie, SearchCandidate
is a lightweight search hit, RankedResult is what a query hands back.
"""

import math
from dataclasses import dataclass, field
from typing import Optional, List, Dict

from finder.constants import UNAVAILABLE


def _text(value, default: str = '') -> str:
    """Coerce an OMDb field to str; anything but a string or number becomes `default`"""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def split_field(value: Optional[str]) -> List[str]:
    """
    Split an OMDb comma-delimited field ("Action, Comedy") into trimmed items

    Returns an empty list for missing, empty, "N/A" or non-string values.
    """
    if not isinstance(value, str) or not value or value.strip() == UNAVAILABLE:
        return []
    return [item.strip() for item in value.split(',') if item.strip()]


def parse_score(rating: Optional[str]) -> Optional[float]:
    """
    Parse an OMDb rating string into a float

    Returns None for the "N/A" sentinel and for anything that is not a finite
    number. Callers must treat None as a rejection, never as zero.
    """
    if rating is None:
        return None
    text = str(rating).strip()
    if not text or text == UNAVAILABLE:
        return None
    try:
        score = float(text)
    except ValueError:
        return None
    if not math.isfinite(score):
        return None
    return score


@dataclass
class EntityRecord:
    """Full OMDb record for one movie"""
    title: str
    year: str
    imdb_id: str
    imdb_rating: str
    genre: str = ''
    plot: str = ''
    genres: List[str] = field(default_factory=list)
    directors: List[str] = field(default_factory=list)
    actors: List[str] = field(default_factory=list)

    @classmethod
    def from_omdb(cls, data: Dict) -> 'EntityRecord':
        """Build a record from a decoded OMDb ?i= / ?t= response"""
        genre = _text(data.get('Genre'))
        return cls(
            title=_text(data.get('Title')),
            year=_text(data.get('Year')),
            imdb_id=_text(data.get('imdbID')),
            imdb_rating=_text(data.get('imdbRating')) or UNAVAILABLE,
            genre=genre,
            plot=_text(data.get('Plot')),
            genres=split_field(genre),
            directors=split_field(data.get('Director')),
            actors=split_field(data.get('Actors')),
        )

    @property
    def score(self) -> Optional[float]:
        return parse_score(self.imdb_rating)

    def has_genre(self, category: str) -> bool:
        """Case-insensitive, whitespace-trimmed exact match against one genre"""
        wanted = category.strip().lower()
        if not wanted:
            return False
        return any(g.strip().lower() == wanted for g in self.genres)

    def to_dict(self) -> Dict:
        return {
            'Title': self.title,
            'Year': self.year,
            'Genre': self.genre,
            'Plot': self.plot,
            'imdbID': self.imdb_id,
            'imdbRating': self.imdb_rating,
        }


@dataclass
class SearchCandidate:
    """One hit from an OMDb ?s= search page"""
    imdb_id: str
    title: str = ''
    year: str = ''
    type: str = ''
    axis: Optional[str] = None  # Genre / Director / Actor in relation search

    @classmethod
    def from_omdb(cls, data: Dict, axis: Optional[str] = None) -> 'SearchCandidate':
        return cls(
            imdb_id=_text(data.get('imdbID')),
            title=_text(data.get('Title')),
            year=_text(data.get('Year')),
            type=_text(data.get('Type')),
            axis=axis,
        )


@dataclass
class RankedResult:
    """EntityRecord projected to the response shape, with its parsed score"""
    title: str
    year: str
    genre: str
    imdb_rating: str
    imdb_id: str
    score: float
    axis: Optional[str] = None

    @classmethod
    def from_record(cls, record: EntityRecord, axis: Optional[str] = None) -> 'RankedResult':
        score = record.score
        if score is None:
            raise ValueError(f"Record {record.imdb_id} has no usable rating: {record.imdb_rating!r}")
        return cls(
            title=record.title,
            year=record.year,
            genre=record.genre,
            imdb_rating=record.imdb_rating,
            imdb_id=record.imdb_id,
            score=score,
            axis=axis,
        )

    def to_dict(self) -> Dict:
        result = {
            'Title': self.title,
            'Year': self.year,
            'Genre': self.genre,
            'imdbRating': self.imdb_rating,
            'imdbID': self.imdb_id,
        }
        if self.axis:
            result['matchedBy'] = self.axis
        return result


@dataclass
class RelatedResults:
    """Answer of a relation search: one ranked list per axis"""
    seed_title: str
    by_tag: List[RankedResult] = field(default_factory=list)
    by_contributor_a: List[RankedResult] = field(default_factory=list)
    by_contributor_b: List[RankedResult] = field(default_factory=list)

    def all_results(self) -> List[RankedResult]:
        return self.by_tag + self.by_contributor_a + self.by_contributor_b

    def to_dict(self) -> Dict:
        return {
            'seedTitle': self.seed_title,
            'byTag': [r.to_dict() for r in self.by_tag],
            'byContributorA': [r.to_dict() for r in self.by_contributor_a],
            'byContributorB': [r.to_dict() for r in self.by_contributor_b],
        }
