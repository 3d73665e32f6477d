"""Stemmed, typo-tolerant BM25 index over short text documents."""

import re
import threading
from bisect import bisect_left
from collections import defaultdict
from collections.abc import Mapping, Sequence

import Stemmer
from rank_bm25 import BM25Okapi
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

_TOKEN_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)*")

# Stemmer objects must not be shared between threads
_local = threading.local()


def _stemmer() -> Stemmer.Stemmer:
    stemmer = getattr(_local, "stemmer", None)
    if stemmer is None:
        stemmer = _local.stemmer = Stemmer.Stemmer("english")
    return stemmer


def tokenize(text: str) -> list[str]:
    """Split text into lowercase stemmed terms."""
    if not text:
        return []
    words = _TOKEN_PATTERN.findall(text.lower())
    return _stemmer().stemWords([w.replace("'", "") for w in words])


class _FieldIndex:
    """BM25 scores, postings and sorted vocabulary for one field."""

    def __init__(self, values: Sequence[str]):
        corpus = [tokenize(value) for value in values]
        self.postings: dict[str, set[int]] = defaultdict(set)
        for doc_id, terms in enumerate(corpus):
            for term in terms:
                self.postings[term].add(doc_id)
        self.vocabulary: list[str] = sorted(self.postings)
        # BM25Okapi divides by the average document length
        self.bm25 = BM25Okapi(corpus) if self.vocabulary else None

    def expand(self, term: str, tolerance: int) -> set[str]:
        """Vocabulary terms matching a query term exactly, by prefix, or within edit distance."""
        matches = set()
        start = bisect_left(self.vocabulary, term)
        for candidate in self.vocabulary[start:]:
            if not candidate.startswith(term):
                break
            matches.add(candidate)

        # Very short terms would match most of the vocabulary
        if tolerance > 0 and len(term) > tolerance * 2:
            for candidate, _, _ in process.extract(
                term,
                self.vocabulary,
                scorer=Levenshtein.distance,
                score_cutoff=tolerance,
                limit=None,
            ):
                matches.add(candidate)
        return matches

    def candidates(self, terms: set[str]) -> set[int]:
        found: set[int] = set()
        for term in terms:
            found |= self.postings.get(term, set())
        return found

    def scores(self, terms: set[str], doc_ids: list[int]) -> list[float]:
        if self.bm25 is None or not terms:
            return [0.0] * len(doc_ids)
        return [float(s) for s in self.bm25.get_batch_scores(sorted(terms), doc_ids)]


class TextIndex:
    """Full-text index over documents with one or more weighted text fields.

    Documents are addressed by their position in the sequence given to the
    constructor. A document matches when any of its fields contains at least
    one expanded query term; the score is the boosted sum of the per-field
    BM25 scores.
    """

    def __init__(self, documents: Sequence[Mapping[str, str]], boosts: Mapping[str, float]):
        self.size = len(documents)
        self._boosts = dict(boosts)
        self._fields = {
            name: _FieldIndex([doc.get(name) or "" for doc in documents])
            for name in self._boosts
        }

    def search(
        self,
        query: str,
        limit: int,
        tolerance: int = 1,
        threshold: float = 0.0,
        allowed: set[int] | None = None,
    ) -> list[tuple[int, float]]:
        """Return up to ``limit`` (doc_id, score) pairs, best first."""
        terms = tokenize(query)
        if not terms or self.size == 0:
            return []

        expanded: dict[str, set[str]] = {}
        doc_ids: set[int] = set()
        for name, field in self._fields.items():
            expanded[name] = set()
            for term in terms:
                expanded[name] |= field.expand(term, tolerance)
            doc_ids |= field.candidates(expanded[name])

        if allowed is not None:
            doc_ids &= allowed
        if not doc_ids:
            return []

        ordered = sorted(doc_ids)
        totals = [0.0] * len(ordered)
        for name, field in self._fields.items():
            boost = self._boosts[name]
            for i, score in enumerate(field.scores(expanded[name], ordered)):
                totals[i] += score * boost

        results = [
            (doc_id, score)
            for doc_id, score in zip(ordered, totals)
            if threshold <= 0 or score >= threshold
        ]
        results.sort(key=lambda r: (-r[1], r[0]))
        return results[:limit]
