# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "STUDY_APP_NAME": "App display name (default: study-planner).",
    "STUDY_LOG_LEVEL": "Console logging level (default: INFO).",
    "STUDY_LOG_TO_FILE": "Also write full DEBUG logs to <data_dir>/study_planner.log (true/false, default: true).",
    # Storage (gitignored)
    "STUDY_DATA_DIR": "Local data directory (default: .local/study_planner).",
    "STUDY_DB_PATH": "Key-value SQLite path (default: <data_dir>/planner.sqlite3).",
    "STUDY_STORAGE_KEY": "Key prefix of the planner blob; the mode is appended (default: studyplanner-data).",
    # Mode
    "STUDY_MODE": "app (real data, default) or demo (sample data under its own key).",
}
