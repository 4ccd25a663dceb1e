"""Advice Prompts — system/user prompt construction for every advisor request type.

Invariants:
    - build_prompts(request) is pure: same request → same (system, user) pair
    - At most context_limit (default 20) past decisions are rendered into context
    - Language bookend: instruction at the TOP and reminder at the BOTTOM
      of every system prompt
    - guided-questions / guided-options / parse-text / weekly-reflection ask
      for a bare JSON array; callers must still tolerate anything back

Design Decisions:
    - One builder per PromptType, dispatched through a dict (no if/elif ladder)
    - Missing current-decision fields render as explicit placeholders
      ("Untitled", "None") so the model never sees "None" from Python
"""

from typing import Callable

from decision_twin.core.domain_types import PromptType
from decision_twin.core.errors import UnknownPromptTypeError
from decision_twin.core.journal_export import text_parsing_prompt
from decision_twin.core.language_strings import (
    coerce_language, get_bookend_closing, get_language_instruction,
)
from decision_twin.schemas.advice import AdviceRequest, AdviceSettings
from decision_twin.schemas.decision import Decision

CONTEXT_DECISION_LIMIT = 20

_TONE_PROMPTS: dict[str, str] = {
    "encouraging": "Be supportive and optimistic while being realistic.",
    "honest": "Be direct and truthful, even if uncomfortable.",
    "analytical": "Focus on data and logical analysis.",
    "friendly": "Be warm, approachable, and conversational.",
}

_STYLE_PROMPTS: dict[str, str] = {
    "direct": "Give clear, actionable advice.",
    "exploratory": "Ask thought-provoking questions to guide thinking.",
    "balanced": "Mix advice with questions to encourage reflection.",
}


def tone_prompt(tone: str) -> str:
    return _TONE_PROMPTS.get(tone, "Be balanced and helpful.")


def style_prompt(style: str) -> str:
    return _STYLE_PROMPTS.get(style, "Provide balanced guidance.")


def format_decision_context(
    decisions: list[Decision], limit: int = CONTEXT_DECISION_LIMIT,
) -> str:
    lines = []
    for d in decisions[:limit]:
        if d.outcomes:
            rendered = "; ".join(
                f"Rating {o.rating}/10, "
                + ("would choose differently" if o.would_choose_differently
                   else "satisfied with choice")
                for o in d.outcomes
            )
            outcomes = f"Outcomes: {rendered}"
        else:
            outcomes = "No outcome recorded yet"
        lines.append(
            f'- "{d.title}" ({d.category}, {d.confidence}% confident): '
            f"{d.choice}. {outcomes}"
        )
    return "\n".join(lines)


def _current_decision_block(
    request: AdviceRequest, choice_label: str, alternatives_label: str,
) -> str:
    cur = request.current_decision
    alternatives = ", ".join(cur.alternatives) if cur and cur.alternatives else "None"
    return (
        f"Title: {(cur and cur.title) or 'Untitled'}\n"
        f"Category: {(cur and cur.category) or 'Unknown'}\n"
        f"{choice_label}: {(cur and cur.choice) or 'Not specified'}\n"
        f"{alternatives_label}: {alternatives}\n"
        f"Context: {(cur and cur.context) or 'None'}"
    )


def _advisor_system(request: AdviceRequest, settings: AdviceSettings) -> str:
    confidence_rule = (
        "Include confidence percentages in your analysis."
        if settings.show_confidence_scores
        else "Do not include confidence percentages."
    )
    return (
        "You are a personal decision advisor AI that has deep knowledge of the "
        "user's past decisions and patterns. "
        f"{tone_prompt(settings.tone)} {style_prompt(settings.advice_style)}\n\n"
        f"You have access to {len(request.decisions)} of the user's past "
        "decisions. Analyze patterns, preferences, and outcomes to provide "
        "personalized advice.\n\n"
        f"{confidence_rule}\n\n"
        "Format your responses in markdown with clear sections and bullet points."
    )


def _past_patterns(request: AdviceRequest, heading: str, empty: str = "") -> str:
    if not request.decisions:
        return empty
    return f"{heading}\n{format_decision_context(request.decisions)}"


def _guided_answers(request: AdviceRequest) -> str:
    return "\n\n".join(
        f"Q: {a.question}\nA: {a.answer}" for a in request.guided_answers or []
    )


# --- Builders ------------------------------------------------------------------
# Each returns (system_prompt, user_prompt) before the language bookend is applied.


def _build_predict(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    cur = request.current_decision
    confidence = cur.confidence if cur and cur.confidence else 50
    block = _current_decision_block(
        request, "Choice", "Alternatives considered",
    )
    user = (
        "Based on these similar past decisions:\n"
        f"{format_decision_context(request.decisions)}\n\n"
        "Predict the likely outcome for this new decision:\n"
        f"{block}\n"
        f"Confidence: {confidence}%\n\n"
        "Provide:\n"
        "1. **Predicted Outcome** - Likely success/failure and why\n"
        "2. **Success Likelihood** - Percentage based on similar past decisions\n"
        "3. **Key Factors to Consider** - What might influence the outcome\n"
        "4. **Risk Assessment** - Potential pitfalls to watch for\n"
        "5. **Recommendation** - Should they proceed or reconsider?"
    )
    return _advisor_system(request, settings), user


def _build_alternatives(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    block = _current_decision_block(
        request, "Their current choice", "Alternatives they've thought of",
    )
    user = (
        "The user is considering this decision:\n"
        f"{block}\n\n"
        "Based on their past decision patterns:\n"
        f"{format_decision_context(request.decisions)}\n\n"
        "Suggest 3-5 alternative approaches they might not have considered. "
        "For each alternative:\n"
        "1. **Alternative Name** - Brief title\n"
        "2. **Description** - What this would look like\n"
        "3. **Why Consider This** - Based on their past patterns, why might this work\n"
        "4. **Potential Drawback** - What to watch out for\n"
        "5. **Fit Score** - How well this matches their decision style (%)"
    )
    return _advisor_system(request, settings), user


def _build_biases(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    user = (
        f"Analyze these {len(request.decisions)} decisions for cognitive biases "
        "and patterns:\n"
        f"{format_decision_context(request.decisions)}\n\n"
        "Identify:\n"
        "1. **Overconfidence Patterns** - Categories or situations where "
        "confidence doesn't match outcomes\n"
        "2. **Recurring Blind Spots** - Types of alternatives consistently overlooked\n"
        "3. **Decision Timing Patterns** - When do they make better/worse decisions?\n"
        "4. **Category-Specific Tendencies** - Biases that appear in specific areas\n"
        "5. **Success vs Confidence Correlation** - Are they calibrated or miscalibrated?\n"
        "6. **Actionable Recommendations** - 3 specific ways to improve "
        "decision-making\n\n"
        "Be constructive but honest about areas for improvement."
    )
    return _advisor_system(request, settings), user


def _build_replay(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    user = (
        'The user wants to explore "what if" scenarios.\n\n'
        "Their past decisions:\n"
        f"{format_decision_context(request.decisions)}\n\n"
        f'Their question: "{request.question or ""}"\n\n'
        "Based on the patterns in their decision history, simulate and analyze:\n"
        "1. **The Alternative Path** - What would likely have happened if they "
        "chose differently\n"
        "2. **Probability Assessment** - How likely is this alternate outcome?\n"
        "3. **Butterfly Effects** - How might subsequent decisions have changed?\n"
        "4. **Learning Insight** - What can they learn from this thought experiment?\n"
        "5. **Moving Forward** - How to apply this insight to future decisions"
    )
    return _advisor_system(request, settings), user


def _build_chat(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    user = (
        "The user's past decisions for context:\n"
        f"{format_decision_context(request.decisions)}\n\n"
        f'The user asks: "{request.question or ""}"\n\n'
        "Provide personalized advice based on their decision patterns and "
        "history. Be specific and reference their actual past decisions when "
        "relevant."
    )
    return _advisor_system(request, settings), user


def _build_guided_questions(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    system = (
        "You are a thoughtful decision-making coach helping someone think "
        f"through an important decision. {tone_prompt(settings.tone)}\n\n"
        "Your task is to generate 4-5 clarifying questions that will help the "
        "person think deeply about their decision. These questions should be:\n"
        "- Specific to the decision context\n"
        "- Thought-provoking but not overwhelming\n"
        "- Progressive (start easier, get deeper)\n"
        "- Personalized based on their past decision patterns if available\n\n"
        "IMPORTANT: Respond ONLY with a valid JSON array of question objects. "
        "No markdown, no explanation, just the JSON."
    )
    history = _past_patterns(
        request, "Their past decision patterns for context:",
        "This is a new user with no decision history yet.",
    )
    user = (
        f'The user is facing this decision: "{request.question or ""}"\n\n'
        f"{history}\n\n"
        "Generate 4-5 thoughtful clarifying questions to help them think "
        "through this decision.\n\n"
        "Respond with a JSON array in this exact format:\n"
        "[\n"
        '  {"id": "1", "question": "Question text here", "placeholder": '
        '"Placeholder hint for the answer"},\n'
        '  {"id": "2", "question": "Question text here", "placeholder": '
        '"Placeholder hint for the answer"}\n'
        "]\n\n"
        "Categories of questions to consider:\n"
        "- Values: \"What's most important to you about this?\"\n"
        '- Timeline: "When do you need to decide by?"\n'
        '- Constraints: "What are your limitations or non-negotiables?"\n'
        '- Stakeholders: "Who else is affected by this decision?"\n'
        "- Risk tolerance: \"What's the worst case you could accept?\"\n\n"
        "Return ONLY the JSON array, no other text."
    )
    return system, user


def _build_guided_options(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    system = (
        "You are a creative decision advisor helping generate options for "
        f"someone's decision. {tone_prompt(settings.tone)}\n\n"
        "Based on their decision context and answers to clarifying questions, "
        "generate 3-5 concrete options they could choose from.\n\n"
        "IMPORTANT: Respond ONLY with a valid JSON array of option objects. "
        "No markdown, no explanation, just the JSON."
    )
    user = (
        f'The user is deciding: "{request.question or ""}"\n\n'
        "Their answers to clarifying questions:\n"
        f"{_guided_answers(request)}\n\n"
        f"{_past_patterns(request, 'Their past decision patterns:')}\n\n"
        "Generate 3-5 concrete options they could choose. Each option should be:\n"
        "- Actionable and specific\n"
        "- Different from each other (varied approaches)\n"
        "- Aligned with their stated values and constraints\n\n"
        "Respond with a JSON array in this exact format:\n"
        "[\n"
        '  {"id": "1", "title": "Option title", "description": "Detailed '
        'description of this option and what it would involve", "pros": '
        '["Pro 1", "Pro 2"], "cons": ["Con 1", "Con 2"]},\n'
        '  {"id": "2", "title": "Option title", "description": "Description", '
        '"pros": ["Pro 1"], "cons": ["Con 1"]}\n'
        "]\n\n"
        "Return ONLY the JSON array, no other text."
    )
    return system, user


def _build_guided_recommendation(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    system = (
        "You are a trusted decision advisor providing a final recommendation. "
        f"{tone_prompt(settings.tone)} {style_prompt(settings.advice_style)}\n\n"
        "Based on everything the user has shared, provide a clear "
        "recommendation with thoughtful reasoning."
    )
    ratings = "\n".join(
        f'"{r.option}": {r.rating}/10' for r in request.option_ratings or []
    )
    history = _past_patterns(
        request, "Their past decision patterns for additional context:",
    )
    user = (
        f'The user is deciding: "{request.question or ""}"\n\n'
        "Their answers to clarifying questions:\n"
        f"{_guided_answers(request)}\n\n"
        "Their ratings of each option (1-10):\n"
        f"{ratings}\n\n"
        f"{history}\n\n"
        "Provide a comprehensive recommendation that includes:\n\n"
        "1. **My Recommendation** - State which option you recommend and why "
        "(consider their ratings but also provide independent analysis)\n\n"
        "2. **Key Reasoning** - 3-4 bullet points explaining why this fits "
        "their values and constraints\n\n"
        "3. **What to Watch For** - Potential challenges and how to address them\n\n"
        "4. **Next Steps** - 2-3 concrete actions to take if they choose this option\n\n"
        "5. **Confidence Level** - Your confidence in this recommendation "
        "(high/medium/low) and why\n\n"
        "Be direct but supportive. Reference specific things they shared in "
        "their answers."
    )
    return system, user


def _build_weekly_reflection(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    system = (
        "You are a reflective journaling coach helping someone review their "
        f"week of decisions. {tone_prompt(settings.tone)} "
        f"{style_prompt(settings.advice_style)}\n\n"
        "IMPORTANT: Respond ONLY with a valid JSON array of 3 question strings."
    )
    summary = request.week_summary
    summary_text = (
        f"Decisions this week: {summary.decision_count}\n"
        f"Most active day: {summary.most_active_day or 'None'}\n"
        f"Primary category: {summary.primary_category or 'None'}\n"
        f"Average confidence: {summary.avg_confidence}%"
        if summary else "No summary available."
    )
    user = (
        f"{summary_text}\n\n"
        f"{_past_patterns(request, 'This week’s decisions:', 'No decisions were logged this week.')}\n\n"
        "Write 3 short, specific reflection questions about this week.\n"
        'Respond with a JSON array like ["Question 1?", "Question 2?", "Question 3?"]'
    )
    return system, user


def _build_parse_text(request: AdviceRequest, settings: AdviceSettings) -> tuple[str, str]:
    system = (
        "You extract structured decisions from free-form journal text. "
        "Respond ONLY with a JSON array."
    )
    return system, text_parsing_prompt(request.text_content or request.question or "")


_BUILDERS: dict[PromptType, Callable[[AdviceRequest, AdviceSettings], tuple[str, str]]] = {
    PromptType.PREDICT: _build_predict,
    PromptType.ALTERNATIVES: _build_alternatives,
    PromptType.BIASES: _build_biases,
    PromptType.REPLAY: _build_replay,
    PromptType.CHAT: _build_chat,
    PromptType.GUIDED_QUESTIONS: _build_guided_questions,
    PromptType.GUIDED_OPTIONS: _build_guided_options,
    PromptType.GUIDED_RECOMMENDATION: _build_guided_recommendation,
    PromptType.WEEKLY_REFLECTION: _build_weekly_reflection,
    PromptType.PARSE_TEXT: _build_parse_text,
}


def build_prompts(
    request: AdviceRequest, context_limit: int = CONTEXT_DECISION_LIMIT,
) -> tuple[str, str]:
    """Return (system_prompt, user_prompt) wrapped in the language bookend.

    Only the first `context_limit` decisions of the request reach the model.
    """
    builder = _BUILDERS.get(request.type)
    if builder is None:
        raise UnknownPromptTypeError(str(request.type))
    settings = request.settings or AdviceSettings()
    request = request.model_copy(
        update={"decisions": request.decisions[:context_limit]},
    )
    system, user = builder(request, settings)
    language = coerce_language(settings.language)
    system = (
        f"{get_language_instruction(language)}\n\n{system}\n\n"
        f"{get_bookend_closing(language)}"
    )
    return system, user
