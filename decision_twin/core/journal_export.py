"""Journal Export — render decisions for Notion, calendars and journaling apps; parse CSV imports.

Invariants:
    - Pure: every function takes its inputs (including `now`) and returns text
    - Dates render in UTC
    - ICS review events exist only for review dates strictly after `now`
    - CSV parsing never raises on content; rows that carry nothing are skipped

Design Decisions:
    - Header aliases (decision/name, selected/option, type, notes/description)
      make hand-made spreadsheets importable without a mapping step
    - Multi-valued CSV cells (alternatives, tags) are ';'-separated
"""

import csv
import io
import json
import re
from datetime import datetime, timedelta

from decision_twin.core.clock import as_utc
from decision_twin.core.domain_types import JournalFormat
from decision_twin.schemas.decision import Decision
from decision_twin.schemas.journal import JournalExport, ParsedDecision

ICS_REVIEW_OFFSETS_DAYS = (7, 30)
DAYONE_STAR_CONFIDENCE = 80
_FILENAME_MAX = 50
_ICS_UNSAFE = re.compile(r"[,;\\]")
_FILENAME_UNSAFE = re.compile(r"[^a-z0-9]+")

_CSV_ALIASES: dict[str, tuple[str, ...]] = {
    "title": ("title", "decision", "name"),
    "choice": ("choice", "selected", "option"),
    "category": ("category", "type"),
    "context": ("context", "notes", "description"),
}


def _long_date(value: datetime) -> str:
    value = as_utc(value)
    return f"{value:%B} {value.day}, {value.year}"


def _long_datetime(value: datetime) -> str:
    value = as_utc(value)
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{_long_date(value)} at {hour}:{value:%M} {meridiem}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


# --- Notion -------------------------------------------------------------------


def export_to_notion(decisions: list[Decision], now: datetime) -> str:
    parts = [
        "# Decision Journal Export\n\n",
        f"*Exported on {_long_date(now)}*\n\n",
        "---\n\n",
    ]
    for d in decisions:
        parts.append(f"## {d.title}\n\n")
        parts.append("| Property | Value |\n|----------|-------|\n")
        parts.append(f"| **Category** | {d.category} |\n")
        parts.append(f"| **Choice** | {d.choice} |\n")
        parts.append(f"| **Confidence** | {d.confidence}% |\n")
        parts.append(f"| **Date** | {_long_date(d.created_at)} |\n")
        if d.tags:
            parts.append(f"| **Tags** | {', '.join(d.tags)} |\n")
        parts.append("\n")
        if d.alternatives:
            parts.append("### Alternatives Considered\n")
            parts.extend(f"- {alt}\n" for alt in d.alternatives)
            parts.append("\n")
        if d.context:
            parts.append(f"### Context\n{d.context}\n\n")
        if d.outcomes:
            parts.append("### Outcomes\n")
            for o in d.outcomes:
                parts.append(f"- **Rating:** {o.rating}/10\n")
                parts.append(
                    f"- **Would choose differently:** "
                    f"{_yes_no(o.would_choose_differently)}\n"
                )
                if o.reflection:
                    parts.append(f"- **Reflection:** {o.reflection}\n")
                parts.append("\n")
        parts.append("---\n\n")
    parts.append(
        "\n## How to Import to Notion\n\n"
        "1. Open Notion and create a new page\n"
        '2. Type `/import` and select "Markdown"\n'
        "3. Upload this file\n"
        "4. Optionally, convert to a database for better organization\n"
    )
    return "".join(parts)


# --- Calendar -----------------------------------------------------------------


def _ics_timestamp(value: datetime) -> str:
    return as_utc(value).strftime("%Y%m%dT%H%M%SZ")


def generate_ics_events(decisions: list[Decision], now: datetime) -> str:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//Decision Twin//Decision Reviews//EN",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]
    for d in decisions:
        for days in ICS_REVIEW_OFFSETS_DAYS:
            review_at = d.created_at + timedelta(days=days)
            if review_at <= now:
                continue
            lines.extend([
                "BEGIN:VEVENT",
                f"UID:{d.id}-{days}@decisiontwin",
                f"DTSTAMP:{_ics_timestamp(now)}",
                f"DTSTART:{_ics_timestamp(review_at)}",
                f"DTEND:{_ics_timestamp(review_at + timedelta(hours=1))}",
                f"SUMMARY:Review decision: {_ICS_UNSAFE.sub(' ', d.title)}",
                f'DESCRIPTION:Time to review your decision about "{d.title}".'
                f"\\n\\nChoice: {d.choice}\\nCategory: {d.category}"
                f"\\nOriginal confidence: {d.confidence}%",
                "CATEGORIES:Decision Review",
                "END:VEVENT",
            ])
    lines.append("END:VCALENDAR")
    return "\n".join(lines)


# --- Journaling apps ----------------------------------------------------------


def sanitize_filename(name: str) -> str:
    slug = _FILENAME_UNSAFE.sub("-", name.lower()).strip("-")
    return slug[:_FILENAME_MAX]


def journal_markdown(decision: Decision) -> str:
    d = decision
    parts = [
        f"# {d.title}\n\n",
        f"**Date:** {_long_datetime(d.created_at)}\n",
        f"**Category:** {d.category}\n",
        f"**Confidence:** {d.confidence}%\n\n",
        f"## Decision\n{d.choice}\n\n",
    ]
    if d.alternatives:
        parts.append("## Alternatives Considered\n")
        parts.extend(f"- {alt}\n" for alt in d.alternatives)
        parts.append("\n")
    if d.context:
        parts.append(f"## Context\n{d.context}\n\n")
    if d.outcomes:
        parts.append("## Outcomes\n")
        for i, o in enumerate(d.outcomes, start=1):
            parts.append(f"### Outcome {i}\n")
            parts.append(f"- Rating: {o.rating}/10\n")
            parts.append(
                f"- Would choose differently: {_yes_no(o.would_choose_differently)}\n"
            )
            if o.reflection:
                parts.append(f"- Reflection: {o.reflection}\n")
            parts.append("\n")
    if d.tags:
        parts.append(f"---\n*Tags: {', '.join(d.tags)}*\n")
    return "".join(parts)


def export_to_journal_format(
    decision: Decision, journal_format: JournalFormat,
) -> JournalExport:
    created = as_utc(decision.created_at)
    date_str = created.strftime("%Y-%m-%d")
    body = journal_markdown(decision)

    if journal_format == JournalFormat.DAYONE:
        created_iso = decision.to_dict()["createdAt"]
        entry = {
            "creationDate": created_iso,
            "modifiedDate": created_iso,
            "text": body,
            "tags": ["decision", decision.category, *decision.tags],
            "starred": decision.confidence >= DAYONE_STAR_CONFIDENCE,
        }
        return JournalExport(
            filename=f"{date_str}_{decision.id}.json",
            content=json.dumps(entry, indent=2, ensure_ascii=False),
            media_type="application/json",
        )

    filename = f"{date_str}_{sanitize_filename(decision.title)}.md"
    if journal_format == JournalFormat.OBSIDIAN:
        tags = ", ".join(["decision", decision.category, *decision.tags])
        front_matter = (
            "---\n"
            f"date: {date_str}\n"
            f"time: {created:%H:%M}\n"
            "type: decision\n"
            f"category: {decision.category}\n"
            f"confidence: {decision.confidence}\n"
            f"tags: [{tags}]\n"
            "---\n\n"
        )
        body = front_matter + body
    return JournalExport(filename=filename, content=body, media_type="text/markdown")


# --- Import -------------------------------------------------------------------


def _first_alias(row: dict[str, str], field: str) -> str:
    for header in _CSV_ALIASES[field]:
        if row.get(header):
            return row[header]
    return ""


def _split_multi(cell: str) -> list[str]:
    return [part.strip() for part in cell.split(";") if part.strip()]


def _parse_confidence(cell: str) -> int:
    try:
        return int(cell) or 50
    except ValueError:
        return 50


def parse_csv(content: str) -> list[ParsedDecision]:
    """Rows of a headered CSV as ParsedDecision; fewer than two lines → []."""
    rows = list(csv.reader(io.StringIO(content.strip()), skipinitialspace=True))
    if len(rows) < 2:
        return []
    headers = [h.strip().lower() for h in rows[0]]
    decisions = []
    for i, values in enumerate(rows[1:], start=1):
        if not any(v.strip() for v in values):
            continue
        row = {
            header: (values[idx].strip() if idx < len(values) else "")
            for idx, header in enumerate(headers)
        }
        decisions.append(ParsedDecision(
            title=_first_alias(row, "title") or f"Decision {i}",
            choice=_first_alias(row, "choice"),
            category=_first_alias(row, "category") or "Other",
            confidence=_parse_confidence(row.get("confidence") or "50"),
            alternatives=_split_multi(row.get("alternatives", "")),
            context=_first_alias(row, "context"),
            tags=_split_multi(row.get("tags", "")),
            date=row.get("date") or None,
        ))
    return decisions


def text_parsing_prompt(text: str) -> str:
    return (
        "Extract decisions from this journal entry or text. For each decision "
        "found, identify:\n"
        "- Title (brief summary)\n"
        "- Choice made\n"
        "- Category (Career, Finance, Health, Relationships, Personal, "
        "Education, Other)\n"
        "- Confidence level (1-100, estimate based on language)\n"
        "- Alternatives considered\n"
        "- Context\n\n"
        "Text to analyze:\n"
        '"""\n'
        f"{text}\n"
        '"""\n\n'
        "Respond with a JSON array of decisions. Each decision should have: "
        "title, choice, category, confidence, alternatives (array), context."
    )
