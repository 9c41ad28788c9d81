GOALS = "goals"
TIME_ENTRIES = "time_entries"
DAILY_GOALS = "daily_goals"
JOURNAL_ENTRIES = "journal_entries"
USERS = "users"

TABLES = (GOALS, TIME_ENTRIES, DAILY_GOALS, JOURNAL_ENTRIES)

# child table, child column -> parent table; parents are restricted on delete
FOREIGN_KEYS = {
    (TIME_ENTRIES, "goal_id"): GOALS,
}

MOODS = {
    "great": "Great! 😄",
    "good": "Good 😊",
    "neutral": "Neutral 😐",
    "bad": "Bad 😕",
    "terrible": "Terrible 😢",
}

GOAL_PRIORITIES = {1: "1 - Highest", 2: "2", 3: "3", 4: "4", 5: "5 - Lowest"}
DAILY_PRIORITIES = {1: "High", 2: "Medium", 3: "Low"}

DEFAULT_DAILY_TARGET = 60
UNCATEGORIZED = "Uncategorized"

VIEWS = {
    "dashboard": "🏠 Dashboard",
    "goals": "🎯 Goals",
    "time": "⏱️ Time Tracker",
    "journal": "📓 Journal",
    "analytics": "📊 Analytics",
}
DEFAULT_VIEW = "dashboard"
