"""Static metadata describing the gameshow manager."""

APP_NAME = "Gameshow"
APP_VERSION = "0.1"
APP_ABOUT_TEXT = (
    "Gameshow keeps track of questions, teams, answers and the leaderboard for a "
    "party quiz night. State is stored in a local key-value file so several "
    "screens can follow the same game."
)
