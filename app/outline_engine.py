"""
StudyMapper — Outline Engine
=============================
Turns raw extracted text into a mind map:
  1. Heading detection (ALL-CAPS / numbered / colon-terminated lines)
  2. Term frequency over content-bearing words
  3. Central idea + branches (heading-driven or context template)
  4. Sub-branches seeded from the top words

Pure and synchronous: no I/O, no shared state, same input → same map.
"""

import re
import logging
from collections import Counter
from enum import Enum
from typing import List, Optional, Tuple, Union

from app.core.errors import EmptyInputError
from app.schemas.mindmap import Branch, ContextType, MindMap, SubBranch

logger = logging.getLogger(__name__)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONSTANTS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

STOP_WORDS = frozenset({
    "the", "is", "at", "which", "on", "a", "an", "and", "or", "but", "in",
    "with", "to", "for", "of", "as", "by", "that", "this", "it", "from",
    "be", "are", "was", "were",
})

CAPS_HEADING_MAX_LEN = 50
COLON_HEADING_MAX_LEN = 60
MIN_WORD_LEN = 5
TOP_WORDS_LIMIT = 20

CENTRAL_IDEA_MAX_LEN = 40
BRANCH_TITLE_MAX_LEN = 30
MIN_HEADINGS_FOR_BRANCHES = 3
MAX_HEADING_BRANCHES = 6
SUB_BRANCHES_PER_BRANCH = 3

CONTEXT_TEMPLATES = {
    ContextType.personal: ("Overview", "Key Points", "Details", "Examples", "Summary"),
    ContextType.academic: ("Definition", "Theory", "Application", "Analysis", "Conclusion"),
    ContextType.creative: ("Concept", "Process", "Techniques", "Examples", "Practice"),
    ContextType.professional: ("Background", "Analysis", "Strategy", "Implementation", "Results"),
}

HEADING_KEY_POINTS = (
    "Important topic to understand",
    "Central to the main subject",
    "Study this carefully",
)
HEADING_EXAMPLE = "Apply this concept in practice"
SUB_BRANCH_KEY_POINTS = ("Supporting point", "Additional detail")
SUB_BRANCH_EXAMPLE = "Specific instance"

_NUMBERED_RE = re.compile(r"^\d+\.")
_NEWLINES_RE = re.compile(r"\n+")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"\W+")


class LineKind(str, Enum):
    heading = "heading"
    content = "content"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TEXT HELPERS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def capitalize_words(text: str) -> str:
    """Upper-case the first letter of every space-separated word, lower-case the rest."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def classify_line(line: str) -> Tuple[LineKind, str]:
    """
    Tag a trimmed line. First matching rule wins:
    ALL-CAPS and short → numbered ("1.") → short and colon-terminated → content.
    Colon headings are returned without their trailing colon.
    """
    if line.upper() == line and len(line) < CAPS_HEADING_MAX_LEN:
        return LineKind.heading, line
    if _NUMBERED_RE.match(line):
        return LineKind.heading, line
    if len(line) < COLON_HEADING_MAX_LEN and line.endswith(":"):
        return LineKind.heading, line[:-1]
    return LineKind.content, line


def extract_headings(text: str) -> List[str]:
    """Headings in document order, taken from the original line structure."""
    headings: List[str] = []
    for raw_line in _NEWLINES_RE.split(text):
        line = raw_line.strip()
        if not line:
            continue
        kind, value = classify_line(line)
        if kind is LineKind.heading:
            headings.append(value)
    return headings


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text: str) -> List[str]:
    """Lower-cased tokens split on runs of non-word characters."""
    return [token for token in _NON_WORD_RE.split(normalize_whitespace(text).lower()) if token]


def rank_top_words(tokens: List[str], limit: int = TOP_WORDS_LIMIT) -> List[str]:
    """
    Most frequent content words (longer than 4 chars, not stop-words).
    Counter keeps first-occurrence order and sorted() is stable, so equal
    counts stay in the order the words first appeared.
    """
    frequency = Counter(
        token for token in tokens
        if len(token) >= MIN_WORD_LEN and token not in STOP_WORDS
    )
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [word for word, _ in ranked[:limit]]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TREE GENERATION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def generate_sub_branches(top_words: List[str], offset: int) -> Tuple[SubBranch, ...]:
    start = offset * SUB_BRANCHES_PER_BRANCH
    sub_branches = []
    for word in top_words[start:start + SUB_BRANCHES_PER_BRANCH]:
        title = capitalize_words(word)
        sub_branches.append(SubBranch(
            title=title,
            explanation=f"Detail about {title}",
            key_points=SUB_BRANCH_KEY_POINTS,
            example=SUB_BRANCH_EXAMPLE,
        ))
    return tuple(sub_branches)


def _heading_branches(headings: List[str], top_words: List[str]) -> List[Branch]:
    branches = []
    for idx, heading in enumerate(headings[1:1 + MAX_HEADING_BRANCHES]):
        branches.append(Branch(
            title=capitalize_words(heading[:BRANCH_TITLE_MAX_LEN]),
            explanation=f"Key concept: {heading}",
            key_points=HEADING_KEY_POINTS,
            example=HEADING_EXAMPLE,
            sub_branches=generate_sub_branches(top_words, idx),
        ))
    return branches


def _template_branches(context_type: ContextType, top_words: List[str]) -> List[Branch]:
    branches = []
    for idx, title in enumerate(CONTEXT_TEMPLATES[context_type]):
        topic = title.lower()
        branches.append(Branch(
            title=title,
            explanation=f"Understanding {topic} in context",
            key_points=(
                f"Focus on {topic}",
                "Connect to main concept",
                "Apply knowledge practically",
            ),
            example=f"Real-world application of {topic}",
            sub_branches=generate_sub_branches(top_words, idx),
        ))
    return branches


def generate_branches(
    headings: List[str],
    top_words: List[str],
    context_type: ContextType,
) -> List[Branch]:
    """Heading-driven when the text has at least 3 headings, otherwise the context template."""
    if len(headings) >= MIN_HEADINGS_FOR_BRANCHES:
        return _heading_branches(headings, top_words)
    return _template_branches(context_type, top_words)


def central_idea_for(headings: List[str], top_words: List[str]) -> str:
    source = headings[0] if headings else " ".join(top_words[:3])
    # Case mapping can lengthen some characters (e.g. "ß" → "SS"), so clip again
    return capitalize_words(source[:CENTRAL_IDEA_MAX_LEN])[:CENTRAL_IDEA_MAX_LEN]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SINGLE ENTRY POINT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def build_mind_map(
    raw_text: Optional[str],
    context_type: Union[ContextType, str, None] = ContextType.personal,
) -> MindMap:
    """
    Build a mind map from extracted text.
    Raises EmptyInputError for empty/whitespace-only text; any other input
    degrades to fewer branches or sub-branches instead of failing.
    """
    if raw_text is None or not raw_text.strip():
        raise EmptyInputError("No text provided")

    context = ContextType.resolve(context_type)

    headings = extract_headings(raw_text)
    top_words = rank_top_words(tokenize(raw_text))

    mind_map = MindMap(
        central_idea=central_idea_for(headings, top_words),
        branches=tuple(generate_branches(headings, top_words, context)),
    )

    mode = "headings" if len(headings) >= MIN_HEADINGS_FOR_BRANCHES else f"template:{context.value}"
    logger.info(
        f"[OUTLINE] ✓ '{mind_map.central_idea}' — {len(mind_map.branches)} branches "
        f"({mode}) — {len(headings)} headings, {len(top_words)} top words"
    )
    return mind_map
