#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
DB Health Checker for the goal tracker
Run:
  python check_db_health.py --uri "mongodb+srv://..." [--db goal_tracker] [--create-missing] [--drop-stray-indexes]
"""

import argparse
import re
from typing import Any, Dict, List

import certifi
from pymongo import MongoClient
from pymongo.errors import OperationFailure

from core.constants import GOALS, TIME_ENTRIES, DAILY_GOALS, JOURNAL_ENTRIES, MOODS
from core.db import EXPECTED_INDEXES

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--uri", required=True, help="MongoDB connection URI")
    p.add_argument("--db", default="goal_tracker", help="Database name")
    p.add_argument("--create-missing", action="store_true", help="Create expected indexes that are missing")
    p.add_argument("--drop-stray-indexes", action="store_true", help="Drop unknown custom indexes (never _id_)")
    return p.parse_args()

def audit_indexes(col, expected_defs, create=False) -> Dict[str, List[str]]:
    """
    Compare current indexes with the expected ones by KEYS, so a renamed index still counts.
    Optionally create the missing ones under the expected name.
    """
    current = list(col.list_indexes())
    cur_keys = [dict(ix.get("key", {})) for ix in current]
    allowed = {"_id_"} | {name for _, name, _ in expected_defs}

    present, missing = [], []
    for keys, name, unique in expected_defs:
        if any(keys == k for k in cur_keys):
            present.append(name)
            continue
        missing.append(name)
        if create:
            try:
                col.create_index(list(keys.items()), name=name, unique=unique)
            except OperationFailure as e:
                print(f"  ⚠️  Could not create index {name} on {col.name}: {e}")

    stray = [ix.get("name") for ix in current
             if ix.get("name") not in allowed and dict(ix.get("key", {})) != {"_id": 1}]
    return {"present": present, "missing": missing, "stray": stray}

def drop_stray_indexes(col, stray_names: List[str]) -> int:
    dropped = 0
    for n in stray_names:
        try:
            col.drop_index(n)
            dropped += 1
        except OperationFailure as e:
            print(f"  ⚠️  Could not drop index {n} on {col.name}: {e}")
    return dropped

def _bad_int(value: Any, lo: int, hi: int = None) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return True
    return value < lo or (hi is not None and value > hi)

def validate_documents(db) -> Dict[str, Dict[str, int]]:
    out = {
        GOALS: {"docs": 0, "missing_user": 0, "bad_target": 0, "bad_priority": 0, "missing_title": 0},
        TIME_ENTRIES: {"docs": 0, "missing_user": 0, "bad_duration": 0, "bad_date": 0},
        DAILY_GOALS: {"docs": 0, "missing_user": 0, "bad_priority": 0, "bad_date": 0},
        JOURNAL_ENTRIES: {"docs": 0, "missing_user": 0, "bad_mood": 0, "bad_date": 0},
    }
    for g in db[GOALS].find({}):
        c = out[GOALS]; c["docs"] += 1
        c["missing_user"] += not g.get("user_id")
        c["missing_title"] += not str(g.get("title") or "").strip()
        c["bad_target"] += _bad_int(g.get("daily_target_minutes"), 1)
        c["bad_priority"] += _bad_int(g.get("priority"), 1, 5)
    for e in db[TIME_ENTRIES].find({}):
        c = out[TIME_ENTRIES]; c["docs"] += 1
        c["missing_user"] += not e.get("user_id")
        c["bad_duration"] += _bad_int(e.get("duration_minutes"), 1)
        c["bad_date"] += not ISO_DATE_RE.match(str(e.get("date") or ""))
    for d in db[DAILY_GOALS].find({}):
        c = out[DAILY_GOALS]; c["docs"] += 1
        c["missing_user"] += not d.get("user_id")
        c["bad_priority"] += _bad_int(d.get("priority"), 1, 3)
        c["bad_date"] += not ISO_DATE_RE.match(str(d.get("date") or ""))
    for j in db[JOURNAL_ENTRIES].find({}):
        c = out[JOURNAL_ENTRIES]; c["docs"] += 1
        c["missing_user"] += not j.get("user_id")
        c["bad_mood"] += j.get("mood") not in MOODS
        c["bad_date"] += not ISO_DATE_RE.match(str(j.get("date") or ""))
    return out

def validate_referential(db) -> Dict[str, int]:
    """
    Every time entry must point at a goal owned by the same user.
    """
    owned = {(g["_id"], g.get("user_id")) for g in db[GOALS].find({}, {"user_id": 1})}
    counts = {"entries": 0, "orphaned": 0, "cross_user": 0}
    goal_ids = {gid for gid, _ in owned}
    for e in db[TIME_ENTRIES].find({}, {"goal_id": 1, "user_id": 1}):
        counts["entries"] += 1
        gid = e.get("goal_id")
        if gid not in goal_ids:
            counts["orphaned"] += 1
        elif (gid, e.get("user_id")) not in owned:
            counts["cross_user"] += 1
    return counts

def main():
    args = parse_args()
    client = MongoClient(args.uri, tlsCAFile=certifi.where(), serverSelectionTimeoutMS=8000)
    db = client[args.db]

    print("🔎 Index audit")
    for name, defs in EXPECTED_INDEXES.items():
        ix = audit_indexes(db[name], defs, create=args.create_missing)
        print(f"  {name}: present={ix['present']}, missing={ix['missing']}, stray={ix['stray']}")
        if args.drop_stray_indexes and ix["stray"]:
            n = drop_stray_indexes(db[name], ix["stray"])
            print(f"  ✅ Dropped {n} stray indexes from {name}")

    print("\n🧪 Document validation")
    for name, counts in validate_documents(db).items():
        print(f"  {name}: " + ", ".join(f"{k}={v}" for k, v in counts.items()))

    print("\n🔗 Referential integrity")
    for k, v in validate_referential(db).items():
        print(f"  {k}: {v}")

    print("\n✨ Done.")

if __name__ == "__main__":
    main()
