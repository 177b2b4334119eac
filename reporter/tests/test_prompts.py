"""Tests for category prompt selection."""

import pytest

from reporter.models.report import IncidentCategory
from reporter.services.prompts import (
    CATEGORY_PROMPTS,
    PHISHING_PROMPT,
    RANSOMWARE_PROMPT,
    build_user_message,
    select_prompt,
)


def test_every_category_has_a_prompt():
    assert set(CATEGORY_PROMPTS) == set(IncidentCategory)


def test_prompts_are_distinct():
    assert len(set(CATEGORY_PROMPTS.values())) == len(IncidentCategory)


@pytest.mark.parametrize("category", list(IncidentCategory))
def test_selection_is_idempotent(category):
    assert select_prompt(category) == select_prompt(category)
    assert select_prompt(category) is CATEGORY_PROMPTS[category]


def test_plain_string_category_selects_prompt():
    assert select_prompt("ransomware") == RANSOMWARE_PROMPT


def test_ransomware_prompt_advises_against_paying():
    assert "generally advise against" in select_prompt("ransomware")


@pytest.mark.parametrize("category", ["made_up", "", "PHISHING"])
def test_unknown_category_falls_back_to_phishing(category):
    assert select_prompt(category) == PHISHING_PROMPT


def test_user_message_without_email():
    assert build_user_message("Someone called me") == "Incident details: Someone called me"


def test_user_message_with_email():
    message = build_user_message("Someone called me", "me@example.com")
    assert message == "Incident details: Someone called me\nContact email: me@example.com"


def test_user_message_ignores_empty_email():
    assert "Contact email" not in build_user_message("Someone called me", "")
