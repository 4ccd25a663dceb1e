"""Language Strings — locale-specific text appended to advisor prompts.

Invariants:
    - All strings are pure data (no IO, no computation beyond lookup)
    - Covers every member of the Language enum
    - The language is always passed in explicitly; there is no "current language"
"""

from decision_twin.core.domain_types import Language


# --- Opening instruction (prepended to the system prompt) ---------------------

_LANGUAGE_INSTRUCTIONS: dict[Language, str] = {
    Language.EN: (
        "You MUST respond in English, even when past decisions are written "
        "in another language."
    ),
    Language.ES: (
        "DEBES responder en espanol, incluso si las decisiones anteriores "
        "estan escritas en otro idioma."
    ),
    Language.FR: (
        "Vous DEVEZ repondre en francais, meme si les decisions passees sont "
        "ecrites dans une autre langue."
    ),
    Language.DE: (
        "Sie MUESSEN auf Deutsch antworten, auch wenn fruehere Entscheidungen "
        "in einer anderen Sprache verfasst sind."
    ),
    Language.PT: (
        "Voce DEVE responder em portugues, mesmo que as decisoes anteriores "
        "estejam escritas em outro idioma."
    ),
}


# --- Bookend closing (appended to the system prompt) --------------------------

_LANGUAGE_BOOKEND_CLOSING: dict[Language, str] = {
    Language.EN: (
        "REMINDER: All your text output, including headings and bullet points, "
        "must be in English."
    ),
    Language.ES: (
        "RECORDATORIO: Todo tu texto de salida, incluidos titulos y vinetas, "
        "debe estar en espanol."
    ),
    Language.FR: (
        "RAPPEL: Tout votre texte de sortie, y compris les titres et les puces, "
        "doit etre en francais."
    ),
    Language.DE: (
        "ERINNERUNG: Ihre gesamte Textausgabe, einschliesslich Ueberschriften "
        "und Aufzaehlungen, muss auf Deutsch sein."
    ),
    Language.PT: (
        "LEMBRETE: Todo o seu texto de saida, incluindo titulos e marcadores, "
        "deve ser em portugues."
    ),
}


def coerce_language(value: str | Language | None) -> Language:
    """Map free-form codes ("pt-BR", "de", None) onto a supported Language."""
    if isinstance(value, Language):
        return value
    if not value:
        return Language.EN
    base = value.split("-")[0].lower()
    try:
        return Language(base)
    except ValueError:
        return Language.EN


def get_language_instruction(language: Language) -> str:
    return _LANGUAGE_INSTRUCTIONS[language]


def get_bookend_closing(language: Language) -> str:
    return _LANGUAGE_BOOKEND_CLOSING[language]
