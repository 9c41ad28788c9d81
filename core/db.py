import logging

import certifi
import streamlit as st
from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from core.config import MONGO_URI, DB_NAME
from core.constants import GOALS, TIME_ENTRIES, DAILY_GOALS, JOURNAL_ENTRIES, USERS

logger = logging.getLogger(__name__)

@st.cache_resource
def get_db() -> Database:
    if not MONGO_URI:
        st.error("MONGO_URI is not configured.")
        st.stop()
    try:
        client = MongoClient(MONGO_URI, serverSelectionTimeoutMS=8000, tlsCAFile=certifi.where())
        client.admin.command("ping")
        db = client[DB_NAME]
        ensure_indexes(db)
        return db
    except Exception as e:
        logger.exception("could not connect to MongoDB")
        st.error(f"Could not connect to MongoDB: {e}")
        st.stop()

# collection -> [(keys, name, unique)]
EXPECTED_INDEXES = {
    USERS: [({"email": 1}, "email", True)],
    GOALS: [({"user_id": 1, "priority": 1}, "user_priority", False)],
    TIME_ENTRIES: [
        ({"user_id": 1, "date": 1}, "user_date", False),
        ({"user_id": 1, "goal_id": 1}, "user_goal", False),
    ],
    DAILY_GOALS: [({"user_id": 1, "date": 1}, "user_date", False)],
    JOURNAL_ENTRIES: [({"user_id": 1, "date": 1}, "user_date", True)],
}

def ensure_indexes(db: Database):
    for coll, defs in EXPECTED_INDEXES.items():
        for keys, name, unique in defs:
            db[coll].create_index([(k, ASCENDING) for k in keys], name=name, unique=unique)
