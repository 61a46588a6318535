"""Regex tables shared by the text heuristics.

Every heuristic in the processing package reads its patterns from a
PatternSet instead of module globals, so a caller (or a test) can swap in a
different table without touching the algorithms. DEFAULT_PATTERNS holds the
tables tuned for English Wikipedia prose.
"""

import re
from dataclasses import dataclass
from re import Pattern

from models.article import ContentType

_I = re.IGNORECASE


def _words(*words: str) -> str:
    """Word-bounded alternation of the given words or phrases."""
    return r"\b(?:" + "|".join(words) + r")\b"


@dataclass(frozen=True)
class PatternSet:
    """Immutable collection of compiled patterns used by the heuristics.

    Attributes:
        sentence_split: Separator for sentence splitting
        technical_term: Capitalized phrases (proper nouns, named concepts)
        numeric_data: Numbers with optional magnitude or unit
        content_types: (type, keyword pattern) pairs in tie-break order
        paragraph_importance: Patterns each adding one point per match
        similarity_word: Words counted by the similarity index
        facts_numeric: Sentences carrying quantities or dates
        facts_achievement: Superlatives, awards and milestones
        facts_vague: Vague quantifiers that disqualify an achievement
        definitions: Definition sentences
        characteristics: Composition / characterisation sentences
        timeline: Dated or period-anchored events
        figures: Creators, founders and other key people
        applications: Uses and fields of application
        significance: Impact and importance statements
        key_term: Subject of a definition sentence (group 1)
        section_sources: (heading keywords, pattern) pairs used to refill
            thin study guide sections from source sentences
    """

    sentence_split: Pattern
    technical_term: Pattern
    numeric_data: Pattern
    content_types: tuple[tuple[ContentType, Pattern], ...]
    paragraph_importance: tuple[Pattern, ...]
    similarity_word: Pattern
    facts_numeric: tuple[Pattern, ...]
    facts_achievement: Pattern
    facts_vague: Pattern
    definitions: tuple[Pattern, ...]
    characteristics: tuple[Pattern, ...]
    timeline: tuple[Pattern, ...]
    figures: tuple[Pattern, ...]
    applications: tuple[Pattern, ...]
    significance: tuple[Pattern, ...]
    key_term: Pattern
    section_sources: tuple[tuple[tuple[str, ...], Pattern], ...]


def count_matches(pattern: Pattern, text: str) -> int:
    """Number of non-overlapping matches of pattern in text."""
    return sum(1 for _ in pattern.finditer(text))


def matches_any(patterns: tuple[Pattern, ...], text: str) -> bool:
    """Whether any of the patterns matches somewhere in text."""
    return any(p.search(text) for p in patterns)


def split_sentences(text: str, patterns: "PatternSet | None" = None, min_length: int = 0) -> list[str]:
    """Split text on runs of sentence punctuation.

    Pieces whose stripped length is not greater than min_length are dropped
    (min_length=0 drops only whitespace-only pieces). Returned sentences are
    not stripped.
    """
    patterns = patterns or DEFAULT_PATTERNS
    return [s for s in patterns.sentence_split.split(text) if len(s.strip()) > min_length]


DEFAULT_PATTERNS = PatternSet(
    sentence_split=re.compile(r"[.!?]+"),
    technical_term=re.compile(r"[A-Z][a-z]*(?:\s+[A-Z][a-z]*)*(?:\s+\([^)]+\))?"),
    numeric_data=re.compile(
        r"\d+(?:,\d{3})*(?:\.\d+)?(?:\s*(?:million|billion|thousand|percent|%|years?|km|miles?))?",
        _I,
    ),
    content_types=(
        (ContentType.BIOGRAPHY, re.compile(_words("born", "died", "life", "career", "education", "early life", "personal", "family"), _I)),
        (ContentType.HISTORY, re.compile(_words("century", "war", "battle", "empire", "dynasty", "ancient", "medieval", "founded", "established"), _I)),
        (ContentType.SCIENCE, re.compile(_words("theory", "research", "discovery", "experiment", "hypothesis", "molecule", "atom", "equation"), _I)),
        (ContentType.GEOGRAPHY, re.compile(_words("located", "climate", "population", "capital", "region", "mountain", "river", "border"), _I)),
        (ContentType.TECHNOLOGY, re.compile(_words("developed", "invented", "software", "hardware", "algorithm", "computer", "digital"), _I)),
        (ContentType.CULTURE, re.compile(_words("tradition", "festival", "art", "music", "literature", "religion", "language", "custom"), _I)),
    ),
    paragraph_importance=(
        re.compile(_words("important", "significant", "major", "key", "primary", "main", "central", "crucial"), _I),
        re.compile(_words("known for", "famous for", "notable", "recognized"), _I),
        re.compile(_words("established", "founded", "created", "developed", "invented"), _I),
        re.compile(r"\d{4}|\d+(?:th|st|nd|rd)\s+century"),
        re.compile(_words("million", "billion", "thousand"), _I),
    ),
    similarity_word=re.compile(r"\b\w{4,}\b"),
    facts_numeric=(
        re.compile(
            r"\b\d{1,4}[,.]?\d*\s*(?:percent|%|million|billion|thousand|meters?|feet|miles|kg|pounds|years?|degrees?)\b",
            _I,
        ),
        re.compile(r"\b(?:founded|established|created|built|invented|discovered)\s+in\s+\d{4}\b", _I),
        re.compile(r"\b\d{4}[-–]\d{4}\b|\b\d{1,2}(?:st|nd|rd|th)\s+century\b", _I),
    ),
    facts_achievement=re.compile(
        _words("first", "largest", "biggest", "most", "highest", "deepest", "fastest", "oldest",
               "newest", "award", "prize", "breakthrough", "achievement"),
        _I,
    ),
    facts_vague=re.compile(_words("some", "many", "several", "various"), _I),
    definitions=(
        re.compile(r"\b(?:is|are)\s+(?:a|an|the)\b.*\b(?:type|kind|form|method|process|system|theory|concept)\b", _I),
        re.compile(r"\bknown\s+as\b|\brefers?\s+to\b|\bdefines?\b|\bmeans?\b", _I),
        re.compile(r"\b(?:called|termed|named)\b.*\b(?:because|due\s+to|owing\s+to)\b", _I),
    ),
    characteristics=(
        re.compile(r"\b(?:consists?\s+of|comprises?|includes?|contains?)\b", _I),
        re.compile(r"\b(?:characterized\s+by|distinguished\s+by|notable\s+for)\b", _I),
    ),
    timeline=(
        re.compile(r"\b\d{4}\b.*\b(?:began|started|founded|established|created|invented|discovered|built)\b", _I),
        re.compile(r"\b(?:during|in)\s+the\s+\d+(?:st|nd|rd|th)?\s+century\b", _I),
        re.compile(
            r"\b(?:ancient|medieval|renaissance|industrial|modern|contemporary)\b.*\b(?:period|era|age|times?)\b",
            _I,
        ),
    ),
    figures=(
        re.compile(r"\b(?:developed\s+by|created\s+by|invented\s+by|founded\s+by)\b", _I),
        re.compile(_words("scientist", "researcher", "inventor", "founder", "pioneer", "scholar"), _I),
    ),
    applications=(
        re.compile(r"\b(?:used\s+(?:for|in|to)|applied\s+(?:in|to)|helps?\s+(?:to|with))\b", _I),
        re.compile(r"\b(?:applications?|uses?|purposes?|benefits?|advantages?)\b", _I),
        re.compile(r"\b(?:today|currently|modern|contemporary|present)\b.*\b(?:use|usage|application|practice)\b", _I),
        re.compile(_words("industry", "industries", "field", "fields", "sector", "sectors"), _I),
    ),
    significance=(
        re.compile(_words("important", "significant", "crucial", "essential", "vital", "critical", "key"), _I),
        re.compile(r"\b(?:impact|influence|effect|contribution|role)\b.*\b(?:on|in|to)\b", _I),
        re.compile(_words("revolutionized", "transformed", "changed", "advanced", "improved"), _I),
    ),
    key_term=re.compile(r"^([^,.:]+?)(?:\s+is\s+|\s+are\s+|\s+refers?\s+to\s+|\s+means?\s+)", _I),
    section_sources=(
        (
            ("key terms", "definition"),
            re.compile(r"\b(?:is|are)\s+(?:a|an|the)\b|\bdefines?\b|\bknown\s+as\b|\brefers?\s+to\b|\bmeans?\b", _I),
        ),
        (
            ("historical", "timeline"),
            re.compile(r"\b\d{4}\b|" + _words("century", "era", "period", "ancient", "medieval", "modern", "founded", "established", "created"), _I),
        ),
        (
            ("fact", "data"),
            re.compile(
                r"\b\d+[,.]?\d*\s*(?:percent|%|million|billion|thousand|meters?|feet|miles|kg)\b|"
                + _words("largest", "biggest", "smallest", "highest", "deepest"),
                _I,
            ),
        ),
        (
            ("application", "relevance"),
            re.compile(_words("used", "applied", "utilize", "employ", "practice", "application", "relevant", "today", "currently", "modern"), _I),
        ),
    ),
)
