# config.example.py

"""
Documentation-only module (safe to commit).

Settings are read from environment variables, optionally through a local .env
file (see .env.example). Keep real API keys in .env, which is gitignored.
"""

ENV_VARS = {
    # App / console
    "ZEN_APP_NAME": "App display name (default: Zen Scholar).",
    "ZEN_LOG_LEVEL": "Console log level (default: WARNING). The log file always gets DEBUG.",
    "ZEN_USER_NAME": "Name shown in the header greeting (default: Student).",
    "ZEN_CONSOLE_COLOR": "Use ANSI colors in the console (true/false, default: true).",
    # Paths (gitignored)
    "ZEN_DATA_DIR": "Local data directory (default: .local/zen_scholar).",
    "ZEN_KV_DB_PATH": "Key-value SQLite path for tasks and preferences (default: <data_dir>/storage.sqlite3).",
    # LLM (OpenAI-compatible endpoint)
    "ZEN_LLM_API_KEY": "API key. Falls back to GEMINI_API_KEY, then API_KEY. Unset => offline demo replies.",
    "ZEN_LLM_BASE_URL": "Endpoint base URL (default: Gemini's OpenAI-compatible endpoint).",
    "ZEN_LLM_MODELS": "Comma/space separated list of models to try in order (default: gemini-2.5-flash).",
    "ZEN_LLM_TIMEOUT_SECONDS": "Per-reply time limit in seconds (default: 30, minimum 1).",
    "ZEN_LLM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout in seconds (default: 5, minimum 0.5).",
}
