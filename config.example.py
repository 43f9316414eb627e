# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "COLLAB_TODO_APP_NAME": "App display name (default: collab-todo).",
    "COLLAB_TODO_LOG_LEVEL": "Console logging level (default: INFO).",
    "COLLAB_TODO_OBSERVER_LOG_LEVEL": "Console level for the observer's periodic reports; WARNING hides them (default: INFO).",
    # Paths (gitignored)
    "COLLAB_TODO_DATA_DIR": "Local data directory (default: .local/collab_todo).",
    "COLLAB_TODO_LOG_DIR": "Directory for collab_todo.log (default: <data_dir>).",
    # Observer
    "COLLAB_TODO_OBSERVER_INTERVAL_SECONDS": "Seconds between task status reports (default: 3).",
    "COLLAB_TODO_OBSERVER_STOP_TIMEOUT_SECONDS": "Max seconds stop() waits for the observer thread (default: 5).",
    # Driver
    "COLLAB_TODO_DEMO_STEP_SECONDS": "Pause before each scripted demo update (default: 5).",
    "COLLAB_TODO_CONSOLE_ENABLED": "Run the interactive /command console instead of the demo (true/false).",
    "COLLAB_TODO_SEED_DEMO_DATA": "Create the demo users and tasks at startup (default: true).",
}
