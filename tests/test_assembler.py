"""Tests for study guide polishing and multi-topic assembly."""

from models.summary import ClusterSummary, Section
from processing.assembler import (
    create_structured_multi_topic_summary,
    cross_domain_insights,
    enhance_and_polish,
    ensure_essential_sections,
    is_too_generic,
    parse_sections,
)
from processing.fallback import create_fallback_study_guide

SOURCE = (
    "Photosynthesis is a process that converts light energy into chemical energy. "
    "It is used in agriculture to estimate crop yields across large regions. "
    "The process was first described in 1779 by Jan Ingenhousz."
)

LONG_BODY = "- The Nile flows 6,650 km north through eleven countries before reaching the sea."


class TestParseSections:

    def test_preamble_and_sections(self):
        preamble, sections = parse_sections("Intro line\n\n## One\n\nBody 1\n\n## Two\nBody 2")
        assert preamble == "Intro line"
        assert sections == [Section("One", "Body 1"), Section("Two", "Body 2")]

    def test_blank_lines_inside_bodies_are_dropped(self):
        _, sections = parse_sections("## One\n\n• a\n\n• b")
        assert sections[0].body == "• a\n• b"


class TestEnhanceAndPolish:

    def test_missing_mandated_sections_are_appended(self):
        result = enhance_and_polish(f"## Overview\n\n{LONG_BODY}", "Nile", SOURCE)
        assert result.startswith("## Overview")
        for heading in (
            "## 🎯 Learning Objectives",
            "## 📚 Key Terms & Definitions",
            "## 💡 Real-World Impact & Applications",
            "## ❓ Review Questions",
        ):
            assert heading in result
        assert "How has Nile evolved and developed over time?" in result

    def test_existing_mandated_sections_are_not_duplicated(self):
        guide = create_fallback_study_guide(SOURCE, "Photosynthesis")
        result = enhance_and_polish(guide, "Photosynthesis", SOURCE)
        assert result.count("Learning Objectives") == 1
        assert result.count("Key Terms") == 1
        assert "## ❓ Review Questions" not in result

    def test_headings_are_normalized(self):
        summary = f"# Overview\n{LONG_BODY}\n\n**Details**\n{LONG_BODY}\n\n### Subheading kept"
        result = enhance_and_polish(summary, "Nile", SOURCE)
        assert "## Overview" in result
        assert "## Details" in result
        assert "### Subheading kept" in result

    def test_bullets_are_normalized(self):
        summary = (
            "## Facts\n"
            "- The Nile flows 6,650 km north through eleven countries\n"
            "* Its basin covers about 3,254,555 square kilometres of land\n"
            "1. It has two major tributaries, the White Nile and Blue Nile"
        )
        result = enhance_and_polish(summary, "Nile", SOURCE)
        assert "• The Nile flows 6,650 km north" in result
        assert "• Its basin covers" in result
        assert "• It has two major tributaries" in result
        assert "\n- " not in result

    def test_summary_prefix_is_removed(self):
        result = enhance_and_polish(f"Summary: Rivers, 2 of them\n\n## Overview\n{LONG_BODY}", "Nile", SOURCE)
        assert not result.startswith("Summary")
        assert result.startswith("Rivers, 2 of them")

    def test_thin_section_is_refilled_from_source(self):
        result = enhance_and_polish("## Key Terms\n- x", "Photosynthesis", SOURCE)
        assert "• Photosynthesis is a process that converts light energy into chemical energy" in result

    def test_thin_application_section_uses_application_sentences(self):
        result = enhance_and_polish("## Applications\n- y", "Photosynthesis", SOURCE)
        assert "• It is used in agriculture to estimate crop yields across large regions" in result

    def test_generic_body_is_rewritten(self):
        summary = "## Overview\n- This topic is important to understand, with 3 main reasons"
        result = enhance_and_polish(summary, "Cat", "x y z")
        assert "This topic" not in result
        assert "• Cat is important to understand" in result

    def test_nearly_empty_body_gets_default(self):
        result = enhance_and_polish("## Overview\n- ok", "Cat", "x y z")
        assert "This section provides important information about Cat" in result

    def test_labels_are_bolded(self):
        body = "- Core Idea: the Nile flows 6,650 km north through eleven countries to the sea."
        result = enhance_and_polish(f"## Overview\n{body}", "Nile", SOURCE)
        assert "• **Core Idea**: the Nile flows" in result

    def test_canonical_heading_names(self):
        summary = f"## 🔍 Core Concepts\n{LONG_BODY}"
        result = enhance_and_polish(summary, "Nile", SOURCE)
        assert "## 🔍 Core Concepts Deep Dive" in result

    def test_no_runs_of_blank_lines(self):
        result = enhance_and_polish(f"## Overview\n\n\n\n{LONG_BODY}\n\n\n", "Nile", SOURCE)
        assert "\n\n\n" not in result

    def test_headings_are_followed_by_blank_line(self):
        result = enhance_and_polish(f"## Overview\n{LONG_BODY}", "Nile", SOURCE)
        assert "## Overview\n\n•" in result


class TestEnsureEssentialSections:

    def test_keywords_match_inside_headings(self):
        sections = [
            Section("🎯 Learning Objectives", "• a"),
            Section("📚 Key Terms & Definitions", "• b"),
            Section("💡 Modern Applications & Relevance", "• c"),
            Section("❓ Comprehensive Review Challenge", "• d"),
        ]
        assert ensure_essential_sections(sections, "Cat", "") == sections

    def test_missing_sections_in_fixed_order(self):
        result = ensure_essential_sections([], "Cat", "x y z")
        assert [s.title for s in result] == [
            "🎯 Learning Objectives",
            "📚 Key Terms & Definitions",
            "💡 Real-World Impact & Applications",
            "❓ Review Questions",
        ]


class TestIsTooGeneric:

    def test_generic_phrases(self):
        assert is_too_generic("These concepts can be applied widely")
        assert not is_too_generic("The Nile flows north")


class TestMultiTopicSummary:

    def test_structure(self):
        summaries = [
            ClusterSummary("science", "Atoms body", ["Atom"]),
            ClusterSummary("history", "Rome body", ["Rome", "Carthage"]),
        ]
        result = create_structured_multi_topic_summary(summaries, 3)

        assert result.startswith("# Comprehensive Study Guide: Multiple Topics")
        assert "covers 3 articles across 2 different domains: science, history" in result
        assert "**Topics Covered**: Atom, Rome, Carthage" in result
        assert "**Domains**: **Science**, **History**" in result
        assert "## 1. Atom\n\nAtoms body" in result
        assert "## 2. History Topics\n\n*Covering: Rome, Carthage*\n\nRome body" in result
        assert "## 🔗 Cross-Domain Insights" in result
        assert result.index("## 🔗 Cross-Domain Insights") < result.index("## ❓ Comprehensive Review Questions")

    def test_single_theme_has_no_cross_domain_section(self):
        summaries = [
            ClusterSummary("science", "A", ["Atom"]),
            ClusterSummary("science", "B", ["Quark"]),
        ]
        result = create_structured_multi_topic_summary(summaries, 2)
        assert "Cross-Domain" not in result
        assert "## ❓ Comprehensive Review Questions" in result

    def test_theme_specific_insights(self):
        assert "Science-Technology Interface" in cross_domain_insights(["science", "technology"])
        assert "Cultural-Historical Context" in cross_domain_insights(["history", "geography"])
        assert "Science-Technology Interface" not in cross_domain_insights(["science", "history"])
