"""Fallback Translation — localizes hardcoded fallback content for non-English users.

Invariants:
    - English returns the input unchanged (no network call)
    - User-authored text is never passed through here, only built-in copy
    - Ids, booleans and numbers are never translated
    - Falls back to the original text on any translation error

Design Decisions:
    - deep-translator GoogleTranslator: no API key, one call per string
    - In-memory cache (module-level dict) keyed by (text, lang); single
      process, lost on restart
"""

import logging

from deep_translator import GoogleTranslator

from decision_twin.core.domain_types import Language
from decision_twin.schemas.advice import GuidedOption, GuidedQuestion

logger = logging.getLogger(__name__)

_cache: dict[tuple[str, str], str] = {}


def translate_text(text: str | None, language: Language) -> str:
    """Translate one string; the original on error, empty input or English."""
    if not text or not text.strip():
        return text or ""
    if language == Language.EN:
        return text

    cache_key = (text, language.value)
    if cache_key in _cache:
        return _cache[cache_key]

    try:
        result = GoogleTranslator(source="en", target=language.value).translate(text)
        if result:
            _cache[cache_key] = result
            return result
        return text
    except Exception as e:
        logger.warning("Translation failed (language=%s): %s", language.value, e)
        return text


def translate_questions(questions: list[str], language: Language) -> list[str]:
    if language == Language.EN:
        return list(questions)
    return [translate_text(q, language) for q in questions]


def translate_guided_questions(
    questions: list[GuidedQuestion], language: Language,
) -> list[GuidedQuestion]:
    if language == Language.EN:
        return [q.model_copy() for q in questions]
    return [
        q.model_copy(update={
            "question": translate_text(q.question, language),
            "placeholder": translate_text(q.placeholder, language),
        })
        for q in questions
    ]


def translate_guided_options(
    options: list[GuidedOption], language: Language,
) -> list[GuidedOption]:
    if language == Language.EN:
        return [o.model_copy(deep=True) for o in options]
    return [
        o.model_copy(update={
            "title": translate_text(o.title, language),
            "description": translate_text(o.description, language),
            "pros": [translate_text(p, language) for p in o.pros],
            "cons": [translate_text(c, language) for c in o.cons],
        })
        for o in options
    ]
