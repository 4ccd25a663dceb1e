"""Decision Advisor — LLM proxy behind the decision-ai endpoint.

Invariants:
    - invoke(prompt_type, payload) → text; never returns empty text
      (NO_RESPONSE_MESSAGE stands in when the model sends nothing usable)
    - An unrecognized prompt type raises UnknownPromptTypeError before any
      remote call
    - Remote failures propagate as AdvisorAPIError subclasses; this service
      does not retry (the client does)

Design Decisions:
    - Single user turn per request: the journal history is rendered into the
      prompt, there is no server-side conversation state
    - Client injected so tests swap in a fake with the same create_message()
"""

import logging

from pydantic import ValidationError

from decision_twin.core.advice_prompts import CONTEXT_DECISION_LIMIT, build_prompts
from decision_twin.core.domain_types import PromptType
from decision_twin.core.errors import (
    EntityValidationError, ErrorContext, UnknownPromptTypeError,
)
from decision_twin.schemas.advice import AdviceRequest, AdviceResponse

logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = "I couldn't generate a response. Please try again."


def extract_text(response) -> str:
    """Concatenate the text blocks of an Anthropic message."""
    parts = [
        block.text for block in getattr(response, "content", None) or []
        if getattr(block, "type", None) == "text" and block.text
    ]
    return "".join(parts).strip()


class DecisionAdvisor:
    def __init__(
        self,
        client,
        model: str,
        max_tokens: int = 2000,
        context_decisions: int = CONTEXT_DECISION_LIMIT,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.context_decisions = context_decisions

    async def advise(self, request: AdviceRequest) -> AdviceResponse:
        system, user = build_prompts(request, self.context_decisions)
        context = ErrorContext(prompt_type=request.type.value)
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}],
            context=context,
        )
        content = extract_text(response)
        if not content:
            logger.warning(
                "Advisor returned no text", extra={"prompt_type": request.type.value},
            )
            content = NO_RESPONSE_MESSAGE
        return AdviceResponse(content=content, type=request.type)

    async def invoke(self, prompt_type: str, payload: dict) -> str:
        try:
            kind = PromptType(prompt_type)
        except ValueError:
            raise UnknownPromptTypeError(prompt_type)
        try:
            request = AdviceRequest.model_validate({**payload, "type": kind})
        except ValidationError as e:
            raise EntityValidationError(
                f"Invalid advisor payload: {e.error_count()} error(s)", "payload",
                ErrorContext(prompt_type=prompt_type),
            )
        return (await self.advise(request)).content
