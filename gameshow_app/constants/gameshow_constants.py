"""Game rules shared across the core services."""

DEFAULT_QUESTION_POINTS: int = 100
TEAM_CODE_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
TEAM_CODE_LENGTH: int = 5
SYNC_INTERVAL_SECONDS: float = 5.0
RESET_CONFIRMATION_PROMPT: str = (
    "Are you sure? This will delete ALL questions, teams, and scores!"
)
