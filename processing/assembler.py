"""Study guide assembly and polishing.

enhance_and_polish() turns whatever text came back from a model (or from the
heuristic fallback) into a study guide with a predictable shape:

    1. Normalize headings to `## ` and bullets to `• `
    2. Refill thin or generic sections from source sentences
    3. Append any missing mandated section (objectives, key terms,
       applications, review questions)
    4. Cosmetic cleanup (spacing, empty markup, canonical heading names)

create_structured_multi_topic_summary() renders the combined document for a
request that was split into several theme clusters.
"""

import logging
import re

from config import DEFAULT_OPTIMIZATION, OptimizationSettings
from models.summary import ClusterSummary, Section
from processing.fallback import BULLET
from processing.patterns import DEFAULT_PATTERNS, PatternSet, split_sentences

logger = logging.getLogger(__name__)

_M = re.MULTILINE

# Sentences shorter than this are not used to refill sections
MIN_SOURCE_SENTENCE = 30
MAX_SOURCE_SENTENCES = 4
MIN_EXISTING_BODY = 20

GENERIC_PHRASES = (
    "this topic",
    "these concepts",
    "fundamental concepts",
    "important to understand",
    "plays a role",
    "can be applied",
)

_SUMMARY_PREFIX = re.compile(r"^\s*Summary:?\s*", re.IGNORECASE)
_PLAIN_HEADING = re.compile(r"^([A-Z][A-Za-z &,]+)[:.]?[ \t]*$", _M)
_BOLD_HEADING = re.compile(r"^\*\*([^*\n]+)\*\*:?[ \t]*$", _M)
_HASH_HEADING = re.compile(r"^#{1,2}(?!#)[ \t]*([^#\n]+)", _M)
_BULLET_MARKER = re.compile(r"^(?:[-•·]|\*(?!\*))[ \t]*", _M)
_NUMBERED = re.compile(r"^\d+\.[ \t]+", _M)
_BULLET_BOLD = re.compile(r"^•[ \t]*\*\*", _M)
_SECTION_SPLIT = re.compile(r"^## ", _M)
_LABEL = re.compile(r"^(• )([A-Z][a-z]+(?:[ ]+[A-Z][a-z]+)*)(:[ \t]*)", _M)
_PLAIN_LABEL = re.compile(r"^(• )(?!\*\*)([^:\n*]+)(: )", _M)
_GENERIC_SUBJECT = re.compile(r"\b(?:this topic|these concepts)\b", re.IGNORECASE)

_HEADING_GAP = re.compile(r"^(## .+)\n(?!\n)", _M)
_EXTRA_NEWLINES = re.compile(r"\n{3,}")
_DOUBLE_BULLET = re.compile(r"•[ \t]*•")
_EMPTY_BOLD = re.compile(r"\*\*\*\*")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")

# Exact heading lines renamed to their canonical wording
CANONICAL_HEADINGS = (
    (re.compile(r"^## 🔍 Core Concepts$", _M), "## 🔍 Core Concepts Deep Dive"),
    (re.compile(r"^## 📊 Important Facts$", _M), "## 📊 Essential Facts & Data"),
    (re.compile(r"^## 💡 Real-World Applications$", _M), "## 💡 Real-World Impact & Applications"),
)


def learning_objectives(title: str) -> list[str]:
    return [
        f"**Analyze** the fundamental principles and core concepts of {title}",
        "**Evaluate** the historical development and key milestones",
        "**Apply** knowledge to understand real-world contexts and applications",
        "**Synthesize** information to make connections with related fields and concepts",
        "**Assess** the significance and impact within its domain",
    ]


def _bullets(items: list[str]) -> str:
    return "\n".join(f"{BULLET} {item.strip()}" for item in items)


def is_too_generic(body: str) -> bool:
    lowered = body.lower()
    return any(phrase in lowered for phrase in GENERIC_PHRASES)


def _source_sentences(
    section_type: str,
    original_content: str,
    title: str,
    patterns: PatternSet,
) -> list[str]:
    """Source material for a section, chosen by the section's heading."""
    if "objective" in section_type:
        return learning_objectives(title)

    for keywords, pattern in patterns.section_sources:
        if any(keyword in section_type for keyword in keywords):
            sentences = split_sentences(original_content, patterns, min_length=MIN_SOURCE_SENTENCE)
            return [s.strip() for s in sentences if pattern.search(s)][:MAX_SOURCE_SENTENCES]
    return []


def default_section_body(section_type: str, title: str) -> str:
    """Static body for a section that has nothing usable."""
    if "objective" in section_type:
        return _bullets(learning_objectives(title))
    if "significance" in section_type:
        return _bullets([
            f"**Academic Impact**: {title} contributes essential knowledge and understanding to its field",
            "**Practical Relevance**: Real-world applications demonstrate its continuing importance",
            "**Future Potential**: Ongoing developments reveal new possibilities and applications",
        ])
    if "study" in section_type or "techniques" in section_type:
        return _bullets([
            "**Active Learning**: Engage with the material through examples and practical applications",
            "**Conceptual Mapping**: Create visual connections between different aspects of the topic",
            "**Critical Analysis**: Question assumptions and examine evidence systematically",
            "**Synthesis Practice**: Combine knowledge from different sources to deepen understanding",
        ])
    return _bullets([
        f"This section provides important information about {title}",
        "Key concepts and principles are fundamental to understanding",
        "Practical applications demonstrate real-world relevance",
    ])


def _improve_existing(body: str, section_type: str, title: str) -> str:
    if len(body) < MIN_EXISTING_BODY:
        return default_section_body(section_type, title)
    improved = _PLAIN_LABEL.sub(r"\1**\2**\3", body)
    return _GENERIC_SUBJECT.sub(title, improved)


def regenerate_section_body(
    heading: str,
    body: str,
    original_content: str,
    title: str,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> str:
    """Replace a thin or generic section body.

    Source sentences matching the section type are preferred; otherwise the
    existing body is cleaned up, or replaced by a default when nearly empty.
    """
    section_type = heading.lower()
    sources = _source_sentences(section_type, original_content, title, patterns)
    if sources:
        return _bullets(sources)
    return _improve_existing(body, section_type, title)


def _enhance_bullets(body: str, title: str) -> str:
    body = _LABEL.sub(r"\1**\2**\3", body)
    return body.replace("• This topic", f"• {title}")


def _normalize_markup(summary: str) -> str:
    summary = _SUMMARY_PREFIX.sub("", summary).strip()
    summary = _PLAIN_HEADING.sub(r"## \1", summary)
    summary = _BOLD_HEADING.sub(r"## \1", summary)
    summary = _HASH_HEADING.sub(r"## \1", summary)
    summary = _BULLET_MARKER.sub("• ", summary)
    summary = _NUMBERED.sub("• ", summary)
    return _BULLET_BOLD.sub("• **", summary)


def parse_sections(summary: str) -> tuple[str, list[Section]]:
    """Split a normalized document into its preamble and `## ` sections.

    Blank lines inside a section body are dropped.
    """
    chunks = _SECTION_SPLIT.split(summary)
    preamble = chunks[0].strip()
    sections = []
    for chunk in chunks[1:]:
        lines = [line for line in chunk.split("\n") if line.strip()]
        if not lines:
            continue
        sections.append(Section(title=lines[0].strip(), body="\n".join(lines[1:]).strip()))
    return preamble, sections


def _missing_objectives(title: str, original_content: str, patterns: PatternSet) -> Section:
    return Section("🎯 Learning Objectives", _bullets(learning_objectives(title)))


def _missing_key_terms(title: str, original_content: str, patterns: PatternSet) -> Section:
    sources = _source_sentences("key terms", original_content, title, patterns)
    body = _bullets(sources) if sources else _bullets([
        f"**{title}**: Key information and defining characteristics",
        "**Core Principles**: Important concepts and principles",
        "**Related Ideas**: Relevant applications and significance",
    ])
    return Section("📚 Key Terms & Definitions", body)


def _missing_applications(title: str, original_content: str, patterns: PatternSet) -> Section:
    sources = _source_sentences("application", original_content, title, patterns)
    body = _bullets(sources) if sources else _bullets([
        f"Key information about {title}",
        "Important concepts and principles",
        "Relevant applications and significance",
    ])
    return Section("💡 Real-World Impact & Applications", body)


def _missing_review(title: str, original_content: str, patterns: PatternSet) -> Section:
    return Section("❓ Review Questions", _bullets([
        f"What are the fundamental principles that define {title}?",
        f"How has {title} evolved and developed over time?",
        "What are the most significant real-world applications?",
        f"Why is {title} important in its field?",
    ]))


# (keyword that marks the section as present, builder for a missing one)
MANDATED_SECTIONS = (
    ("learning objectives", _missing_objectives),
    ("key terms", _missing_key_terms),
    ("application", _missing_applications),
    ("review", _missing_review),
)


def ensure_essential_sections(
    sections: list[Section],
    title: str,
    original_content: str,
    patterns: PatternSet = DEFAULT_PATTERNS,
) -> list[Section]:
    """Append any mandated section the document lacks.

    A section counts as present when its heading contains the section's
    keyword, so "Comprehensive Review Challenge" satisfies review questions.
    """
    result = list(sections)
    headings = [s.title.lower() for s in sections]
    for keyword, build in MANDATED_SECTIONS:
        if not any(keyword in heading for heading in headings):
            logger.debug("Adding missing section | keyword=%s | title=%s", keyword, title[:60])
            result.append(build(title, original_content, patterns))
    return result


def _final_polish(summary: str) -> str:
    summary = _EXTRA_NEWLINES.sub("\n\n", summary)
    summary = _HEADING_GAP.sub("\\1\n\n", summary)
    for pattern, replacement in CANONICAL_HEADINGS:
        summary = pattern.sub(replacement, summary)
    summary = _DOUBLE_BULLET.sub("•", summary)
    summary = _EMPTY_BOLD.sub("", summary)
    summary = _TRAILING_SPACE.sub("\n", summary)
    return _EXTRA_NEWLINES.sub("\n\n", summary).strip()


def enhance_and_polish(
    summary: str,
    title: str,
    original_content: str,
    patterns: PatternSet = DEFAULT_PATTERNS,
    settings: OptimizationSettings = DEFAULT_OPTIMIZATION,
) -> str:
    """Normalize, refill and clean up a study guide.

    Args:
        summary: Raw study guide text from a model or the fallback
        title: Article title (used in synthesized content)
        original_content: Source text that refills thin sections
        patterns: Pattern tables to use
        settings: Thresholds (short_section_length)

    Returns:
        Polished markdown containing at least the mandated sections
    """
    normalized = _normalize_markup(summary)
    preamble, sections = parse_sections(normalized)

    enhanced = []
    for section in sections:
        body = section.body
        if len(body) < settings.short_section_length or is_too_generic(body):
            body = regenerate_section_body(section.title, body, original_content, title, patterns)
        enhanced.append(Section(section.title, _enhance_bullets(body, title)))

    enhanced = ensure_essential_sections(enhanced, title, original_content, patterns)

    parts = [preamble] if preamble else []
    parts.extend(section.render() for section in enhanced)
    return _final_polish("\n\n".join(parts))


def _capitalized(theme: str) -> str:
    return theme[:1].upper() + theme[1:]


def cross_domain_insights(themes: list[str]) -> str:
    """Interdisciplinary prompts for a document spanning several themes."""
    lines = [
        "### Interdisciplinary Connections",
        "",
        f"{BULLET} **Methodological Similarities**: How do research and analytical approaches compare across {' and '.join(themes)}?",
        "",
        f"{BULLET} **Historical Patterns**: What common historical trends or patterns emerge across these different domains?",
        "",
        f"{BULLET} **Contemporary Relevance**: How do these topics intersect in modern applications and current events?",
        "",
    ]
    if "science" in themes and "technology" in themes:
        lines += [
            f"{BULLET} **Science-Technology Interface**: How do scientific principles drive technological innovations in these areas?",
            "",
        ]
    if "history" in themes and ("culture" in themes or "geography" in themes):
        lines += [
            f"{BULLET} **Cultural-Historical Context**: How have historical events shaped cultural and geographical developments?",
            "",
        ]
    lines += [
        "### Comparative Analysis Framework",
        "",
        f"{BULLET} Compare the scale and scope of impact across different domains",
        f"{BULLET} Analyze the role of human agency vs. natural forces",
        f"{BULLET} Evaluate the pace of change and development in each area",
    ]
    return "\n".join(lines)


def integrated_review_questions(themes: list[str]) -> str:
    groups = (
        ("Analysis Questions", [
            f"How do the methodologies and approaches differ between {', '.join(themes)} disciplines?",
            "What are the most significant challenges facing each of these domains today?",
            "Which topics show the most potential for future development or research?",
        ]),
        ("Synthesis Questions", [
            "If you had to explain the connections between all these topics to someone unfamiliar with them, what would you emphasize?",
            "What skills or knowledge from one domain could be applied to enhance understanding in another?",
            "How might these different fields collaborate to address global challenges?",
        ]),
        ("Application Questions", [
            "Design a project that would require knowledge from at least two of these domains",
            "What career paths might benefit from understanding multiple topics covered here?",
            "How would you prioritize learning these topics based on your personal or professional goals?",
        ]),
    )
    blocks = []
    for heading, questions in groups:
        blocks.append(f"### {heading}\n\n" + "\n\n".join(f"{BULLET} {q}" for q in questions))
    return "\n\n".join(blocks)


def create_structured_multi_topic_summary(cluster_summaries: list[ClusterSummary], total_articles: int) -> str:
    """Combine per-cluster study guides into one document.

    Sections follow cluster order. Cross-domain insights appear only when
    the clusters span more than one theme.
    """
    themes = [cs.theme for cs in cluster_summaries]
    distinct_themes = list(dict.fromkeys(themes))
    all_titles = [t for cs in cluster_summaries for t in cs.titles]

    parts = [
        "# Comprehensive Study Guide: Multiple Topics",
        f"This study guide covers {total_articles} articles across {len(themes)} different domains: {', '.join(themes)}.",
        "## 📋 Overview",
        f"**Topics Covered**: {', '.join(all_titles)}",
        f"**Domains**: {', '.join(f'**{_capitalized(t)}**' for t in themes)}",
    ]

    for index, cluster in enumerate(cluster_summaries, start=1):
        heading = cluster.titles[0] if len(cluster.titles) == 1 else f"{_capitalized(cluster.theme)} Topics"
        parts.append(f"## {index}. {heading}")
        if len(cluster.titles) > 1:
            parts.append(f"*Covering: {', '.join(cluster.titles)}*")
        parts.append(cluster.content.strip())

    if len(distinct_themes) > 1:
        parts.append("## 🔗 Cross-Domain Insights")
        parts.append(cross_domain_insights(themes))

    parts.append("## ❓ Comprehensive Review Questions")
    parts.append(integrated_review_questions(themes))

    return "\n\n".join(parts)
