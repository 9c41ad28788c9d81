"""Tests for core.backend: row ownership, foreign keys and upserts."""

from __future__ import annotations

from datetime import date

import pytest

from core.auth import AuthClient
from core.backend import Backend
from core.constants import DAILY_GOALS, GOALS, JOURNAL_ENTRIES, TIME_ENTRIES
from core.errors import AuthError, BackendError
from data_access.goals_repo import create_goal, delete_goal
from data_access.journal_repo import get_journal_entry, save_journal_entry
from data_access.time_entries_repo import create_time_entry, list_entries_between


@pytest.fixture()
def goal(ctx):
    return create_goal(ctx, "Read", "Study", 60, 1)


# ---- insert / select ----


def test_insert_assigns_id_owner_and_timestamp(ctx, goal):
    assert isinstance(goal["id"], str) and goal["id"]
    assert goal["user_id"] == ctx.user["id"]
    assert goal["created_at"] is not None
    assert "_id" not in goal


def test_insert_ignores_caller_supplied_owner(ctx, other_ctx):
    row = ctx.backend.insert(GOALS, {"title": "x", "category": "c", "daily_target_minutes": 5,
                                     "priority": 1, "user_id": other_ctx.user["id"], "id": "forced"})
    assert row["user_id"] == ctx.user["id"]
    assert row["id"] != "forced"


def test_select_is_scoped_to_session_user(ctx, other_ctx, goal):
    create_goal(other_ctx, "Swim", "Health", 30, 2)
    assert [g["title"] for g in ctx.backend.select(GOALS)] == ["Read"]
    assert [g["title"] for g in other_ctx.backend.select(GOALS)] == ["Swim"]


def test_select_order_and_limit(ctx):
    for title, prio in [("b", 3), ("a", 1), ("c", 2)]:
        create_goal(ctx, title, "x", 10, prio)
    assert [g["title"] for g in ctx.backend.select(GOALS, order="priority")] == ["a", "c", "b"]
    assert [g["title"] for g in ctx.backend.select(GOALS, order="-priority", limit=2)] == ["b", "c"]


def test_select_one_returns_none_when_missing(ctx):
    assert ctx.backend.select_one(JOURNAL_ENTRIES, {"date": "2024-03-06"}) is None


def test_signed_out_session_cannot_query(db):
    backend = Backend(db, AuthClient(db))
    with pytest.raises(AuthError):
        backend.select(GOALS)


def test_embed_joins_goal_fields(ctx, goal):
    create_time_entry(ctx, goal["id"], 25, "2024-03-06")
    (row,) = ctx.backend.select(TIME_ENTRIES, embed={"goal": (GOALS, "goal_id", ("title", "category"))})
    assert row["goal"] == {"title": "Read", "category": "Study"}


def test_entries_between_filters_dates(ctx, goal):
    for day in ("2024-02-24", "2024-02-25", "2024-03-06", "2024-03-07"):
        create_time_entry(ctx, goal["id"], 10, day)
    rows = list_entries_between(ctx, date(2024, 2, 25), date(2024, 3, 6))
    assert [r["date"] for r in rows] == ["2024-02-25", "2024-03-06"]
    assert rows[0]["goal"]["daily_target_minutes"] == 60


# ---- ownership on writes ----


def test_cross_user_update_rejected(ctx, other_ctx):
    item = ctx.backend.insert(DAILY_GOALS, {"title": "x", "priority": 1, "date": "2024-03-06", "completed": False})
    with pytest.raises(BackendError):
        other_ctx.backend.update(DAILY_GOALS, item["id"], {"completed": True})
    assert ctx.backend.select_one(DAILY_GOALS, {"id": item["id"]})["completed"] is False


def test_cross_user_delete_rejected(ctx, other_ctx, goal):
    with pytest.raises(BackendError):
        delete_goal(other_ctx, goal["id"])
    assert len(ctx.backend.select(GOALS)) == 1


def test_update_returns_new_row(ctx):
    item = ctx.backend.insert(DAILY_GOALS, {"title": "x", "priority": 1, "date": "2024-03-06", "completed": False})
    row = ctx.backend.update(DAILY_GOALS, item["id"], {"completed": True, "user_id": "hijack"})
    assert row["completed"] is True
    assert row["user_id"] == ctx.user["id"]


# ---- foreign keys ----


def test_time_entry_needs_existing_goal(ctx):
    with pytest.raises(BackendError) as exc:
        create_time_entry(ctx, "no-such-goal", 10, "2024-03-06")
    assert exc.value.code == "23503"


def test_time_entry_cannot_use_another_users_goal(ctx, other_ctx):
    theirs = create_goal(other_ctx, "Swim", "Health", 30, 2)
    with pytest.raises(BackendError):
        create_time_entry(ctx, theirs["id"], 10, "2024-03-06")


def test_goal_delete_restricted_while_entries_exist(ctx, goal):
    create_time_entry(ctx, goal["id"], 10, "2024-03-06")
    with pytest.raises(BackendError) as exc:
        delete_goal(ctx, goal["id"])
    assert exc.value.code == "23503"
    assert len(ctx.backend.select(GOALS)) == 1
    assert len(ctx.backend.select(TIME_ENTRIES)) == 1


def test_goal_without_entries_deletes(ctx, goal):
    delete_goal(ctx, goal["id"])
    assert ctx.backend.select(GOALS) == []


# ---- upsert ----


def test_journal_upsert_keeps_one_row_per_day(ctx):
    save_journal_entry(ctx, "2024-03-06", "good", "first")
    save_journal_entry(ctx, "2024-03-06", "great", "second")
    rows = ctx.backend.select(JOURNAL_ENTRIES)
    assert len(rows) == 1
    assert rows[0]["mood"] == "great"
    assert rows[0]["reflection"] == "second"


def test_journal_upsert_is_per_user(ctx, other_ctx):
    save_journal_entry(ctx, "2024-03-06", "good", "mine")
    save_journal_entry(other_ctx, "2024-03-06", "bad", "theirs")
    assert get_journal_entry(ctx, "2024-03-06")["reflection"] == "mine"
    assert get_journal_entry(other_ctx, "2024-03-06")["reflection"] == "theirs"


def test_journal_unique_index_rejects_raw_duplicate(ctx):
    ctx.backend.insert(JOURNAL_ENTRIES, {"date": "2024-03-06", "mood": "good", "reflection": "a"})
    with pytest.raises(BackendError) as exc:
        ctx.backend.insert(JOURNAL_ENTRIES, {"date": "2024-03-06", "mood": "bad", "reflection": "b"})
    assert exc.value.code == "23505"
