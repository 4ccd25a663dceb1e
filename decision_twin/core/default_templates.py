"""Built-in Templates — fixed catalog, never persisted, never mutated.

Invariants:
    - Callers receive copies; the module-level catalog is read-only
    - merge_catalog() lists built-ins first, then customs flagged is_custom=True
"""

from decision_twin.schemas.template import DecisionTemplate

DEFAULT_TEMPLATES: tuple[DecisionTemplate, ...] = (
    DecisionTemplate(
        id="career-job-offer",
        name="Job Offer",
        category="Career",
        tags=["career", "job", "important"],
        title_placeholder="Should I accept the job offer from [Company]?",
        choice_placeholder="I decided to accept/decline the offer",
        alternatives_placeholder=(
            "Stay at current job\nNegotiate better terms\nWait for other offers"
        ),
        context_placeholder=(
            "Consider: salary, growth opportunities, work-life balance, "
            "company culture, commute, benefits..."
        ),
        icon="💼",
    ),
    DecisionTemplate(
        id="purchase-major",
        name="Major Purchase",
        category="Purchase",
        tags=["purchase", "financial", "planning"],
        title_placeholder="Should I buy [item] for $[amount]?",
        choice_placeholder="I decided to purchase/not purchase",
        alternatives_placeholder=(
            "Buy a cheaper alternative\nWait for a sale\n"
            "Rent instead of buy\nSave for later"
        ),
        context_placeholder=(
            "Consider: budget impact, urgency (1-10), alternatives researched, "
            "long-term value..."
        ),
        icon="🛍️",
    ),
    DecisionTemplate(
        id="health-lifestyle",
        name="Lifestyle Change",
        category="Health",
        tags=["health", "lifestyle", "habits"],
        title_placeholder="Should I start/stop [habit or lifestyle change]?",
        choice_placeholder="I decided to commit to this change",
        alternatives_placeholder=(
            "Start gradually\nTry a different approach\n"
            "Seek professional guidance\nPostpone until ready"
        ),
        context_placeholder=(
            "My motivation: \nPotential obstacles: \nSupport system: \nTimeline goal: "
        ),
        icon="🏃",
    ),
    DecisionTemplate(
        id="relationship-conversation",
        name="Difficult Conversation",
        category="Relationships",
        tags=["relationship", "communication", "emotional"],
        title_placeholder="Should I have a conversation with [person] about [topic]?",
        choice_placeholder="I decided to have/postpone this conversation",
        alternatives_placeholder=(
            "Write a letter instead\nSeek mediation\n"
            "Wait for better timing\nAddress indirectly"
        ),
        context_placeholder=(
            "How I'm feeling: \nWhat I hope to achieve: \n"
            "Possible reactions: \nBest/worst case scenarios: "
        ),
        icon="💬",
    ),
    DecisionTemplate(
        id="finance-investment",
        name="Investment Decision",
        category="Finance",
        tags=["investment", "financial", "long-term"],
        title_placeholder="Should I invest $[amount] in [investment type]?",
        choice_placeholder="I decided to invest/not invest",
        alternatives_placeholder=(
            "Invest smaller amount\nDiversify into multiple options\n"
            "Keep in savings\nSeek professional advice first"
        ),
        context_placeholder=(
            "Risk tolerance (1-10): \nInvestment timeline: \n"
            "Research done: \nPortion of portfolio: "
        ),
        icon="📈",
    ),
)


def merge_catalog(custom: list[DecisionTemplate]) -> list[DecisionTemplate]:
    builtins = [t.model_copy(deep=True) for t in DEFAULT_TEMPLATES]
    customs = [t.model_copy(update={"is_custom": True}) for t in custom]
    return builtins + customs


def upsert_template(
    templates: list[DecisionTemplate], template: DecisionTemplate,
) -> list[DecisionTemplate]:
    """Replace in place when the id exists, append otherwise."""
    updated = list(templates)
    for i, existing in enumerate(updated):
        if existing.id == template.id:
            updated[i] = template
            return updated
    updated.append(template)
    return updated
