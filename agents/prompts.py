"""Prompt templates for study guide generation.

Three prompts are used:
    SINGLE_TOPIC_PROMPT: one article
    MULTI_TOPIC_PROMPT: combined content of several articles whose titles are
        passed as one comma-separated string
    UNIFIED_PROMPT: a cluster of related articles sharing one theme

All templates are filled with str.format(); literal braces are not used.
"""

from models.cluster import Cluster
from models.summary import SummaryParams

SINGLE_TOPIC_PROMPT = """Create an EXCEPTIONAL and COMPREHENSIVE study guide for: {title}

Transform this Wikipedia content into an engaging, memorable educational resource that makes learning exciting and effective. Use vivid examples, clear explanations, and fascinating details.

## 🎯 Learning Objectives
Write 4-5 specific, actionable learning goals using precise verbs like "analyze," "evaluate," "synthesize," and "apply." Make each objective clear and measurable.

## 📚 Key Terms & Definitions
Provide comprehensive definitions with context:
• **Term**: Clear definition + why it matters + example or analogy
Focus on terms students must understand to master this topic.

## 🏛️ Historical Development & Timeline
Tell the compelling story of how this topic evolved:
• Origins and founding moments with specific dates
• Key breakthroughs and discoveries
• Influential figures and their unique contributions
• How past events shape current understanding

## 🔍 Core Concepts Masterclass
Make complex ideas accessible and memorable:
• Use powerful analogies and real-world comparisons
• Explain the underlying "why" behind each concept
• Provide concrete examples students can visualize
• Break down abstract ideas into digestible components

## 📂 Classification & Organization
Structure the topic's complexity clearly:
• Main categories and subcategories
• Different approaches or schools of thought
• Hierarchical relationships and dependencies
• How experts organize and think about this field

## 📊 Critical Facts & Data
Present essential information memorably:
• Key statistics with context and significance
• Important dates, measurements, and quantities
• Comparisons that help visualize scale and importance
• Trends and patterns that reveal deeper truths

## 💡 Modern Applications & Relevance
Showcase how this topic impacts today's world:
• Current technologies and innovations
• Professional and career connections
• Societal benefits and ongoing challenges
• Cutting-edge research and future possibilities

## 🎯 Significance & Broader Impact
Explain why this topic truly matters:
• Its role in advancing human knowledge
• Connections to other important fields
• Cultural, social, or scientific implications
• How it shapes our understanding of the world

## 🎓 Master-Level Study Techniques
Provide sophisticated learning strategies:
• Effective memorization techniques for key information
• Critical thinking approaches for deeper understanding
• Ways to connect this topic to other knowledge
• Self-assessment methods to test comprehension

## ❓ Comprehensive Review Challenge
Create questions that test true understanding:
• Analysis questions requiring deep thinking
• Application scenarios using real-world examples
• Synthesis challenges connecting multiple concepts
• Evaluation questions requiring informed judgment

Content to analyze:
{content}

Write with passion and precision. Include fascinating details, memorable examples, and create content that transforms studying from a chore into an adventure. Make every section informative, engaging, and genuinely helpful for mastering this topic. Aim for {target_words} words."""


MULTI_TOPIC_PROMPT = """Create an EXCEPTIONAL and COMPREHENSIVE study guide for these Wikipedia topics: {title}

Transform this into an engaging, educational masterpiece that goes beyond basic summaries. Use vivid examples, clear explanations, and memorable details that make learning enjoyable and effective.

## 🎯 Learning Objectives
Create 4-5 specific, measurable learning goals that clearly state what students will master. Use action verbs like "analyze," "evaluate," "synthesize," and "compare."

## 📚 Key Terms & Definitions
Provide crystal-clear definitions with context and examples. Format as:
• **Term**: Comprehensive definition with real-world context and why it matters

## 🏛️ Historical Context & Timeline
Present a compelling narrative of development with:
• Specific dates and pivotal moments
• Key figures and their contributions
• Cause-and-effect relationships
• How events shaped current understanding

## 🔍 Core Concepts Deep Dive
Break down complex ideas into accessible explanations:
• Use analogies and metaphors to clarify difficult concepts
• Provide concrete examples from daily life
• Explain the "why" behind each concept, not just the "what"
• Connect abstract ideas to practical applications

## 🔗 Interconnections & Synthesis
Reveal the fascinating relationships between topics:
• How concepts influence and build upon each other
• Cross-disciplinary connections and applications
• Patterns and themes that emerge across topics
• Contemporary relevance and future implications

## 📊 Essential Facts & Data
Present crucial information in memorable ways:
• Statistics with context and significance
• Comparisons that help visualize scale
• Trends and patterns over time
• Quantitative data that tells a story

## 💡 Real-World Impact & Applications
Showcase current, relevant applications with specific examples:
• Modern innovations and technologies
• Professional and career applications
• Societal benefits and challenges
• Future possibilities and ongoing research

## 🎓 Advanced Study Strategies
Provide sophisticated learning techniques:
• Memory aids and mnemonics for complex information
• Effective practice methods and self-testing approaches
• Ways to connect new knowledge to existing understanding
• Critical thinking questions that deepen comprehension

## ❓ Thought-Provoking Review Questions
Design questions that require higher-order thinking:
• Analysis and evaluation questions
• Synthesis and application challenges
• Compare-and-contrast scenarios
• Problem-solving applications

Content to analyze:
{content}

Write with enthusiasm and clarity. Use specific examples, fascinating details, and create content that students will actually want to read and remember. Aim for {target_words} words of engaging, educational content."""


UNIFIED_PROMPT = """Create a comprehensive study guide for these related {theme} topics: {title}

These articles share the common theme of {theme}. Create a cohesive study guide that:

1. **Synthesizes Information**: Combine related concepts from all articles into unified explanations
2. **Identifies Connections**: Highlight relationships and interactions between the topics
3. **Provides Context**: Show how these topics fit together in the broader field of {theme}
4. **Maintains Clarity**: Despite covering multiple topics, keep explanations clear and organized

## 🎯 Unified Learning Objectives
Create learning objectives that span all topics and emphasize their interconnections.

## 📚 Core Concepts Integration
Merge related concepts from all articles, showing how they build upon or relate to each other.

## 🔗 Cross-Topic Connections
Explicitly highlight how the topics influence, relate to, or build upon each other.

## 📊 Comparative Analysis
Where appropriate, compare and contrast similar concepts across the different topics.

## 💡 Synthesized Applications
Show how the combined knowledge from all topics creates broader applications and understanding.

Content to analyze:
{content}

Aim for {target_words} words of cohesive, integrated content."""


def is_multi_topic(title: str) -> bool:
    """Titles joined with commas denote several topics in one request."""
    return "," in title


def build_study_guide_prompt(content: str, title: str, params: SummaryParams) -> str:
    """Prompt for one article, or for combined articles with a joined title."""
    template = MULTI_TOPIC_PROMPT if is_multi_topic(title) else SINGLE_TOPIC_PROMPT
    return template.format(title=title, content=content, target_words=params.target_words)


def combined_cluster_content(cluster: Cluster) -> str:
    """Optimized content of every cluster member, separated by rules."""
    return "\n\n---\n\n".join(
        f"Article: {article.title}\n{article.optimized_content}" for article in cluster.articles
    )


def build_unified_prompt(cluster: Cluster, params: SummaryParams) -> str:
    return UNIFIED_PROMPT.format(
        theme=cluster.theme.value,
        title=cluster.combined_title,
        content=combined_cluster_content(cluster),
        target_words=params.target_words,
    )
