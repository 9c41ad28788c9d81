"""Tests for services.validation form rules."""

from __future__ import annotations

import pytest

from core.errors import ValidationError
from services.validation import (
    validate_credentials, validate_daily_goal, validate_goal, validate_journal,
    validate_manual_time, validate_password_reset,
)

GOAL = {"title": "Read", "category": "Study", "daily_target_minutes": 30, "priority": 2, "description": ""}


# ---- goals ----


def test_goal_ok_strips_and_casts():
    clean = validate_goal({**GOAL, "title": "  Read  ", "daily_target_minutes": "45"})
    assert clean == {"title": "Read", "description": None, "category": "Study",
                     "daily_target_minutes": 45, "priority": 2}


def test_goal_zero_target_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_goal({**GOAL, "daily_target_minutes": 0})
    assert exc.value.errors == {"daily_target_minutes": "Must be at least 1 minute"}


def test_goal_required_fields_reported_together():
    with pytest.raises(ValidationError) as exc:
        validate_goal({"title": " ", "category": "", "daily_target_minutes": None, "priority": None})
    assert set(exc.value.errors) == {"title", "category", "daily_target_minutes", "priority"}
    assert exc.value.errors["title"] == "Title is required"


@pytest.mark.parametrize("priority", [0, 6, "x"])
def test_goal_priority_bounds(priority):
    with pytest.raises(ValidationError) as exc:
        validate_goal({**GOAL, "priority": priority})
    assert "priority" in exc.value.errors


# ---- manual time ----


def test_manual_time_total():
    assert validate_manual_time({"goal_id": "g1", "hours": 1, "minutes": 30, "notes": " x "}) == ("g1", 90, "x")


def test_manual_time_zero_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_manual_time({"goal_id": "g1", "hours": 0, "minutes": 0})
    assert exc.value.errors == {"duration": "Please enter a valid time"}


@pytest.mark.parametrize("field, value, message", [
    ("hours", -1, "Hours must be 0 or greater"),
    ("minutes", 60, "Minutes must be less than 60"),
    ("minutes", -5, "Minutes must be 0 or greater"),
    ("minutes", None, "Minutes is required"),
])
def test_manual_time_bounds(field, value, message):
    form = {"goal_id": "g1", "hours": 1, "minutes": 0, field: value}
    with pytest.raises(ValidationError) as exc:
        validate_manual_time(form)
    assert exc.value.errors[field] == message


def test_manual_time_needs_goal():
    with pytest.raises(ValidationError) as exc:
        validate_manual_time({"goal_id": None, "hours": 1, "minutes": 0})
    assert exc.value.errors == {"goal_id": "Please select a goal"}


# ---- daily goals / journal ----


def test_daily_goal():
    assert validate_daily_goal({"title": " Call mum ", "priority": "1"}) == {"title": "Call mum", "priority": 1}
    with pytest.raises(ValidationError) as exc:
        validate_daily_goal({"title": "", "priority": 4})
    assert exc.value.errors == {"title": "Please enter a goal", "priority": "Please select priority"}


def test_journal():
    assert validate_journal({"mood": "good", "reflection": " ok "}) == {"mood": "good", "reflection": "ok"}
    with pytest.raises(ValidationError) as exc:
        validate_journal({"mood": "meh", "reflection": ""})
    assert exc.value.errors == {"mood": "Please select your mood", "reflection": "Please write your reflection"}


# ---- auth ----


@pytest.mark.parametrize("email", ["a@b.co", "First.Last+tag@Example.ORG", "x_y%z@sub.domain.io"])
def test_email_accepts(email):
    assert validate_credentials({"email": email, "password": "123456"})[0] == email


@pytest.mark.parametrize("email", ["plain", "a@b", "a@b.c", "@b.com", "a b@c.com"])
def test_email_rejects(email):
    with pytest.raises(ValidationError) as exc:
        validate_credentials({"email": email, "password": "123456"})
    assert exc.value.errors == {"email": "Invalid email address"}


def test_short_password():
    with pytest.raises(ValidationError) as exc:
        validate_credentials({"email": "a@b.co", "password": "12345"})
    assert exc.value.errors == {"password": "Password must be at least 6 characters"}


def test_reset_mismatch_checked_after_field_rules():
    form = {"email": "a@b.co", "new_password": "123", "confirm_password": "456789"}
    with pytest.raises(ValidationError) as exc:
        validate_password_reset(form)
    assert exc.value.errors == {"new_password": "Password must be at least 6 characters"}

    form["new_password"] = "1234567"
    with pytest.raises(ValidationError) as exc:
        validate_password_reset(form)
    assert exc.value.errors == {"confirm_password": "Passwords do not match"}


def test_reset_ok():
    form = {"email": "a@b.co", "new_password": "abcdef", "confirm_password": "abcdef"}
    assert validate_password_reset(form) == ("a@b.co", "abcdef")
