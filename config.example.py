# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKLIST_CONSOLE_LOG": "Also log to stderr while the console runs (default: false).",
    # Storage
    "TASKLIST_DATA_DIR": "Local data directory (default: .local/tasklist).",
    "TASKLIST_STORAGE_BACKEND": "json | sqlite | memory (default: json).",
    "TASKLIST_STORAGE_PATH": (
        "Storage file (default: <data_dir>/storage.json or <data_dir>/storage.sqlite3)."
    ),
    "TASKLIST_STORAGE_KEY": "Key the task list is saved under (default: taskListApp_tasks).",
    # Import / export
    "TASKLIST_EXPORT_DIR": "Where /export writes tasks-<date>.json (default: <data_dir>/exports).",
}
