"""Tests for journal_export — Notion/ICS/journal rendering and CSV import."""

import json
from datetime import timedelta

from decision_twin.core.domain_types import JournalFormat
from decision_twin.core.journal_export import (
    export_to_journal_format, export_to_notion, generate_ics_events,
    parse_csv, sanitize_filename, text_parsing_prompt,
)
from tests.factories import T0, make_decision, make_outcome


# --- Notion -------------------------------------------------------------------


def test_notion_export_renders_table_and_outcomes():
    decision = make_decision(
        tags=["work"], context="Remote role",
        outcomes=[make_outcome(rating=9, reflection="Great team")],
    )
    text = export_to_notion([decision], T0)
    assert text.startswith("# Decision Journal Export")
    assert "*Exported on January 1, 2024*" in text
    assert "| **Confidence** | 70% |" in text
    assert "| **Tags** | work |" in text
    assert "- Stay" in text
    assert "- **Rating:** 9/10" in text
    assert "- **Reflection:** Great team" in text
    assert "How to Import to Notion" in text


def test_notion_export_of_nothing_still_has_header():
    text = export_to_notion([], T0)
    assert "# Decision Journal Export" in text
    assert "## " in text  # import instructions


# --- Calendar -----------------------------------------------------------------


def test_ics_only_future_review_dates():
    ics = generate_ics_events([make_decision()], T0 + timedelta(days=10))
    lines = ics.split("\n")
    assert lines[0] == "BEGIN:VCALENDAR"
    assert lines[-1] == "END:VCALENDAR"
    assert lines.count("BEGIN:VEVENT") == 1
    assert "UID:d-1-30@decisiontwin" in lines
    assert "DTSTART:20240131T120000Z" in lines
    assert "DTEND:20240131T130000Z" in lines


def test_ics_both_reviews_for_fresh_decision():
    ics = generate_ics_events([make_decision()], T0)
    assert ics.count("BEGIN:VEVENT") == 2


def test_ics_summary_escapes_separators():
    ics = generate_ics_events([make_decision(title="Rent; or, buy")], T0)
    assert "SUMMARY:Review decision: Rent  or  buy" in ics


# --- Journaling apps ----------------------------------------------------------


def test_sanitize_filename():
    assert sanitize_filename("Take the Job!!") == "take-the-job"
    assert len(sanitize_filename("a" * 80)) == 50


def test_markdown_export():
    export = export_to_journal_format(make_decision(), JournalFormat.MARKDOWN)
    assert export.filename == "2024-01-01_take-the-job.md"
    assert export.media_type == "text/markdown"
    assert export.content.startswith("# Take the job")
    assert "**Date:** January 1, 2024 at 12:00 PM" in export.content


def test_obsidian_export_has_front_matter():
    export = export_to_journal_format(make_decision(tags=["move"]), JournalFormat.OBSIDIAN)
    assert export.content.startswith("---\ndate: 2024-01-01\ntime: 12:00\n")
    assert "tags: [decision, Career, move]" in export.content


def test_dayone_export_stars_confident_decisions():
    confident = export_to_journal_format(make_decision(confidence=85), JournalFormat.DAYONE)
    entry = json.loads(confident.content)
    assert entry["starred"] is True
    assert entry["tags"] == ["decision", "Career"]
    assert confident.filename == "2024-01-01_d-1.json"

    unsure = json.loads(export_to_journal_format(make_decision(), JournalFormat.DAYONE).content)
    assert unsure["starred"] is False


# --- CSV import ---------------------------------------------------------------


def test_parse_csv_with_aliases_and_multi_values():
    content = (
        "Decision,Selected,Type,Confidence,Alternatives,Tags,Notes\n"
        'Move city,"Lisbon, PT",Personal,80,Porto;Stay,life;big,Sunny\n'
    )
    [parsed] = parse_csv(content)
    assert parsed.title == "Move city"
    assert parsed.choice == "Lisbon, PT"
    assert parsed.category == "Personal"
    assert parsed.confidence == 80
    assert parsed.alternatives == ["Porto", "Stay"]
    assert parsed.tags == ["life", "big"]
    assert parsed.context == "Sunny"


def test_parse_csv_defaults():
    [parsed] = parse_csv("title,choice,confidence\n,Tea,lots\n")
    assert parsed.title == "Decision 1"
    assert parsed.category == "Other"
    assert parsed.confidence == 50


def test_parse_csv_skips_blank_rows_and_header_only():
    assert parse_csv("title,choice") == []
    assert len(parse_csv("title,choice\nA,B\n,\nC,D\n")) == 2


def test_text_parsing_prompt_embeds_text():
    assert '"""\nI quit my job.\n"""' in text_parsing_prompt("I quit my job.")
