"""Heuristic study guide used when no model produces a summary.

Sentences of the source text are sorted into five categories by regex
(facts, key terms, historical context, applications, significance) and
poured into a fixed markdown template. Every template section always has
content: a category with no matching sentence falls back to static text.
"""

import logging
from dataclasses import dataclass, field

from processing.patterns import DEFAULT_PATTERNS, PatternSet, matches_any, split_sentences

logger = logging.getLogger(__name__)

# Sentences this short rarely carry a complete statement
MIN_SENTENCE_LENGTH = 25

MAX_FACTS = 6
MAX_NUMERIC_FACTS = 5
MAX_ACHIEVEMENTS = 3
MAX_KEY_TERMS = 5
MAX_DEFINITIONS = 4
MAX_CHARACTERISTICS = 3
MAX_HISTORICAL = 5
MAX_TIMELINE = 4
MAX_FIGURES = 3
MAX_APPLICATIONS = 4
MAX_SIGNIFICANCE = 3

BULLET = "•"


@dataclass
class FallbackExtraction:
    """Categorized source sentences (stripped, in document order)."""

    facts: list[str] = field(default_factory=list)
    key_terms: list[str] = field(default_factory=list)
    historical: list[str] = field(default_factory=list)
    applications: list[str] = field(default_factory=list)
    significance: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.facts or self.key_terms or self.historical or self.applications or self.significance)


def _select(sentences: list[str], patterns: tuple, limit: int) -> list[str]:
    return [s for s in sentences if matches_any(patterns, s)][:limit]


def extract_fallback_content(content: str, patterns: PatternSet = DEFAULT_PATTERNS) -> FallbackExtraction:
    """Sort the sentences of content into study guide categories.

    Categories are independent, so one sentence may land in several.
    """
    sentences = [s.strip() for s in split_sentences(content, patterns, min_length=MIN_SENTENCE_LENGTH)]

    numeric = _select(sentences, patterns.facts_numeric, MAX_NUMERIC_FACTS)
    achievements = [
        s for s in sentences
        if patterns.facts_achievement.search(s) and not patterns.facts_vague.search(s)
    ][:MAX_ACHIEVEMENTS]

    definitions = _select(sentences, patterns.definitions, MAX_DEFINITIONS)
    characteristics = _select(sentences, patterns.characteristics, MAX_CHARACTERISTICS)

    timeline = _select(sentences, patterns.timeline, MAX_TIMELINE)
    figures = _select(sentences, patterns.figures, MAX_FIGURES)

    return FallbackExtraction(
        facts=(numeric + achievements)[:MAX_FACTS],
        key_terms=(definitions + characteristics)[:MAX_KEY_TERMS],
        historical=(timeline + figures)[:MAX_HISTORICAL],
        applications=_select(sentences, patterns.applications, MAX_APPLICATIONS),
        significance=_select(sentences, patterns.significance, MAX_SIGNIFICANCE),
    )


def extract_key_term(sentence: str, patterns: PatternSet = DEFAULT_PATTERNS) -> str:
    """Subject of a definition sentence, or its first three words.

    Example:
        >>> extract_key_term("Photosynthesis is a process used by plants")
        'Photosynthesis'
    """
    match = patterns.key_term.match(sentence.strip())
    if match:
        return match.group(1).strip()
    return " ".join(sentence.split(" ")[:3])


def _labelled(sentence: str, markers: tuple[str, ...], label: str) -> str:
    """Prefix label unless the sentence already contains a marker word."""
    text = sentence.strip()
    if any(marker in text for marker in markers):
        return text
    return f"{label}: {text}"


def historical_point(sentence: str) -> str:
    return _labelled(sentence, ("century", "founded", "established"), "Historical context")


def factual_point(sentence: str) -> str:
    text = sentence.strip()
    if any(ch.isdigit() for ch in text):
        return text
    return f"Key fact: {text}"


def application_point(sentence: str) -> str:
    return _labelled(sentence, ("used", "applied", "application"), "Practical application")


def significance_point(sentence: str) -> str:
    return _labelled(sentence, ("important", "significant", "impact"), "Significance")


def _bullets(items: list[str]) -> str:
    return "\n".join(f"{BULLET} {item}" for item in items)


def _term_bullets(sentences: list[str], patterns: PatternSet) -> str:
    return "\n".join(f"{BULLET} **{extract_key_term(s, patterns)}**: {s.strip()}" for s in sentences)


GENERIC_DEFINITION = (
    "A comprehensive topic encompassing fundamental concepts, principles, and methodologies "
    "within its domain, characterized by specific features that distinguish it from related subjects."
)


def single_topic_study_guide(title: str, extraction: FallbackExtraction, patterns: PatternSet = DEFAULT_PATTERNS) -> str:
    """Render the fallback study guide for one article."""
    terms = _term_bullets(extraction.key_terms, patterns) if extraction.key_terms else _bullets([
        f"**{title}**: {GENERIC_DEFINITION}",
        "**Core Characteristics**: The distinctive features that define this topic within its domain",
        "**Methodological Approaches**: The systematic methods used to study and understand this subject",
    ])
    historical = _bullets([historical_point(s) for s in extraction.historical]) if extraction.historical else _bullets([
        "**Origins**: This topic emerged from systematic observation and scholarly inquiry over time",
        "**Key Developments**: Significant breakthroughs have shaped current understanding and applications",
        "**Evolution**: Continuous refinement through research and practical experience has advanced the field",
    ])
    facts = _bullets([factual_point(s) for s in extraction.facts]) if extraction.facts else _bullets([
        "**Quantitative Measures**: Key statistics and numerical data that characterize this topic",
        "**Comparative Context**: How this topic relates to others in terms of scale, importance, or impact",
        "**Temporal Patterns**: Changes and trends observed over time",
    ])
    applications = _bullets([application_point(s) for s in extraction.applications]) if extraction.applications else _bullets([
        "**Contemporary Uses**: How this topic is actively applied in current professional and academic contexts",
        "**Technological Integration**: The role this topic plays in modern technological systems and innovations",
        "**Problem-Solving Applications**: Practical ways this knowledge addresses real-world challenges",
    ])
    significance = _bullets([significance_point(s) for s in extraction.significance]) if extraction.significance else _bullets([
        "**Academic Importance**: This topic contributes essential knowledge to its field and related disciplines",
        "**Practical Value**: Real-world applications demonstrate the utility and relevance of this knowledge",
        "**Future Potential**: Ongoing research and development continue to reveal new possibilities and applications",
    ])

    return f"""## 🎯 Learning Objectives
{BULLET} **Define** and explain the fundamental concepts, principles, and characteristics of {title}
{BULLET} **Analyze** the historical development, key milestones, and evolutionary progression
{BULLET} **Evaluate** the significance, impact, and contemporary relevance in its field
{BULLET} **Apply** core principles to understand real-world scenarios and practical implementations
{BULLET} **Synthesize** knowledge to make connections with related concepts and disciplines

## 📚 Key Terms & Definitions
{terms}

## 🏛️ Historical Development & Timeline
{historical}

## 🔍 Core Concepts Masterclass
{BULLET} **Fundamental Principles**: The basic laws, rules, or theories that govern this topic's operation and understanding
{BULLET} **Systematic Organization**: How experts categorize and structure knowledge within this field
{BULLET} **Interconnected Elements**: The relationships between different components and sub-areas
{BULLET} **Practical Implications**: How theoretical understanding translates into real-world applications

## 📊 Critical Facts & Data
{facts}

## 💡 Modern Applications & Relevance
{applications}

## 🎯 Significance & Broader Impact
{significance}

## 🎓 Master-Level Study Techniques
{BULLET} **Deep Dive Analysis**: Examine each component systematically to build comprehensive understanding
{BULLET} **Connection Building**: Link new knowledge to existing understanding and related topics
{BULLET} **Application Practice**: Work through examples and scenarios to reinforce theoretical learning
{BULLET} **Critical Evaluation**: Question assumptions and analyze evidence to develop analytical thinking

## ❓ Comprehensive Review Challenge
{BULLET} What are the essential characteristics that distinguish {title} from related concepts?
{BULLET} How has historical development influenced current understanding and practices?
{BULLET} What evidence supports the significance and relevance of {title} in its field?
{BULLET} How can the principles of {title} be applied to solve contemporary problems or challenges?"""


def multi_topic_study_guide(topics: list[str], extraction: FallbackExtraction, patterns: PatternSet = DEFAULT_PATTERNS) -> str:
    """Render the fallback study guide for several related topics."""
    focus = " and ".join(topics[:2]) + (" and related topics" if len(topics) > 2 else "")

    terms = _term_bullets(extraction.key_terms, patterns) if extraction.key_terms else _bullets([
        f"**{topic}**: A fundamental concept with significant theoretical and practical implications in its field"
        for topic in topics
    ])
    historical = _bullets([historical_point(s) for s in extraction.historical]) if extraction.historical else _bullets([
        "These fields have evolved through centuries of scholarly research and practical innovation",
        "Key developments occurred during major historical periods, each building upon previous knowledge",
        "Modern understanding reflects contributions from diverse cultures and intellectual traditions",
    ])
    facts = _bullets([factual_point(s) for s in extraction.facts]) if extraction.facts else _bullets([
        "These topics encompass quantifiable elements that demonstrate their scope and impact",
        "Statistical data reveals patterns and trends that inform current understanding",
        "Measurable outcomes provide evidence for theoretical principles and practical applications",
    ])
    applications = _bullets([application_point(s) for s in extraction.applications]) if extraction.applications else _bullets([
        "Modern industries and technologies actively utilize principles from these fields",
        "Professional practices incorporate these concepts to solve complex contemporary challenges",
        "Innovation and advancement continue through practical application of theoretical knowledge",
    ])

    return f"""## 🎯 Learning Objectives
{BULLET} **Analyze** the fundamental principles and methodologies underlying {focus}
{BULLET} **Evaluate** the interconnections and cross-disciplinary relationships between these subjects
{BULLET} **Synthesize** historical developments with contemporary applications and future implications
{BULLET} **Apply** key concepts to solve problems and understand real-world scenarios
{BULLET} **Compare** different approaches, theories, and methodologies within these domains

## 📚 Key Terms & Definitions
{terms}

## 🏛️ Historical Context & Timeline
{historical}

## 🔍 Core Concepts Deep Dive
{BULLET} **Foundational Principles**: These topics share common theoretical frameworks and methodological approaches
{BULLET} **Interconnected Systems**: Understanding one area enhances comprehension of related concepts and applications
{BULLET} **Hierarchical Organization**: Complex ideas build from simpler components, creating sophisticated knowledge structures
{BULLET} **Cross-Disciplinary Integration**: These subjects influence and are influenced by multiple academic and professional fields

## 📊 Essential Facts & Data
{facts}

## 💡 Real-World Impact & Applications
{applications}

## 🎓 Advanced Study Strategies
{BULLET} **Concept Mapping**: Create visual diagrams connecting ideas across different topics to reveal relationships
{BULLET} **Comparative Analysis**: Systematically compare and contrast approaches, theories, and applications
{BULLET} **Case Study Method**: Examine real-world examples to understand practical implementation of concepts
{BULLET} **Synthesis Exercises**: Combine knowledge from multiple areas to address complex, multifaceted problems

## ❓ Thought-Provoking Review Questions
{BULLET} How do the fundamental principles of these topics complement and enhance each other?
{BULLET} What historical developments were crucial in shaping current understanding, and why?
{BULLET} In what ways do these concepts address contemporary global challenges and opportunities?
{BULLET} How might future developments in these fields transform current practices and understanding?"""


def create_fallback_study_guide(
    content: str,
    title: str,
    multi_topic: bool = False,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> str:
    """Build a complete study guide from source text alone.

    Args:
        content: Source text (already truncated for prompting)
        title: Article title, or comma-joined titles for several topics
        multi_topic: Render the multi-topic template
        patterns: Pattern tables to use

    Returns:
        Markdown study guide with every template section populated
    """
    extraction = extract_fallback_content(content, patterns)
    logger.info(
        "Building fallback study guide | title=%s | facts=%d | terms=%d | historical=%d | applications=%d",
        title[:60],
        len(extraction.facts),
        len(extraction.key_terms),
        len(extraction.historical),
        len(extraction.applications),
    )

    if multi_topic:
        topics = [t.strip() for t in title.split(",") if t.strip()] or [title]
        return multi_topic_study_guide(topics, extraction, patterns)
    return single_topic_study_guide(title, extraction, patterns)
