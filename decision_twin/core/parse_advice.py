"""Parse Advice — pull structured data out of free-form advisor text.

Invariants:
    - Never raises on model output; unusable text yields an empty list
    - JSON is looked for as: the whole text, a fenced ```json block, then the
      outermost [...] span
    - Items that do not validate are dropped individually, not the whole list

Design Decisions:
    - Fallback content lives here too so services and routes share one source
"""

import json
import re

from pydantic import ValidationError

from decision_twin.schemas.advice import GuidedOption, GuidedQuestion
from decision_twin.schemas.journal import ParsedDecision

MAX_REFLECTION_QUESTIONS = 3

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_LIST_PREFIX_RE = re.compile(r"^[\d.\-*\s]+")

FALLBACK_GUIDED_QUESTIONS: tuple[GuidedQuestion, ...] = (
    GuidedQuestion(
        id="1", question="What's most important to you about this decision?",
        placeholder="e.g., financial security, personal growth, relationships...",
    ),
    GuidedQuestion(
        id="2", question="What's your timeline for making this decision?",
        placeholder="e.g., this week, this month, no rush...",
    ),
    GuidedQuestion(
        id="3", question="What constraints or limitations do you have?",
        placeholder="e.g., budget, location, time...",
    ),
    GuidedQuestion(
        id="4", question="Who else is affected by this decision?",
        placeholder="e.g., family, team, just me...",
    ),
)

FALLBACK_GUIDED_OPTIONS: tuple[GuidedOption, ...] = (
    GuidedOption(
        id="1", title="Option A",
        description="The first approach based on your inputs",
        pros=["Aligns with your values"], cons=["May require adjustment"],
    ),
    GuidedOption(
        id="2", title="Option B", description="An alternative approach",
        pros=["Different perspective"], cons=["May not fit all constraints"],
    ),
    GuidedOption(
        id="3", title="Option C", description="A balanced middle ground",
        pros=["Combines benefits"], cons=["May compromise on some aspects"],
    ),
)


def extract_json_array(text: str) -> list | None:
    """First JSON array found in text, or None."""
    if not text:
        return None
    candidates = [text.strip()]
    candidates.extend(m.group(1).strip() for m in _FENCE_RE.finditer(text))
    span = _ARRAY_RE.search(text)
    if span:
        candidates.append(span.group(0))
    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, ValueError):
            continue
        if isinstance(parsed, list):
            return parsed
    return None


def extract_question_lines(text: str, limit: int = MAX_REFLECTION_QUESTIONS) -> list[str]:
    """Lines containing '?', list markers stripped, first `limit` only."""
    questions = []
    for line in text.splitlines():
        if not line.strip() or "?" not in line:
            continue
        cleaned = _LIST_PREFIX_RE.sub("", line).strip()
        if cleaned:
            questions.append(cleaned)
        if len(questions) >= limit:
            break
    return questions


def parse_reflection_questions(text: str) -> list[str]:
    parsed = extract_json_array(text)
    if parsed is None:
        return extract_question_lines(text)
    questions = []
    for item in parsed:
        if isinstance(item, str):
            questions.append(item)
        elif isinstance(item, dict) and isinstance(item.get("question"), str):
            questions.append(item["question"])
    return questions


def _validate_items(items: list | None, model):
    valid = []
    for i, item in enumerate(items or [], start=1):
        if not isinstance(item, dict):
            continue
        item = {"id": str(i), **item}
        item["id"] = str(item["id"])
        try:
            valid.append(model.model_validate(item))
        except ValidationError:
            continue
    return valid


def parse_guided_questions(text: str) -> list[GuidedQuestion]:
    return _validate_items(extract_json_array(text), GuidedQuestion)


def parse_guided_options(text: str) -> list[GuidedOption]:
    return _validate_items(extract_json_array(text), GuidedOption)


def parse_extracted_decisions(text: str) -> list[ParsedDecision]:
    decisions = []
    for item in extract_json_array(text) or []:
        if not isinstance(item, dict):
            continue
        try:
            decisions.append(ParsedDecision.model_validate(item))
        except ValidationError:
            continue
    return decisions
