import os
from pathlib import Path

# Session lifetime; 0 keeps sessions until restart
SESSION_TTL_SECONDS = float(os.environ.get("SESSION_TTL_SECONDS", "1800"))
SWEEP_INTERVAL_SECONDS = float(os.environ.get("SWEEP_INTERVAL_SECONDS", "300"))

ALLOWED_ORIGIN = os.environ.get("ALLOWED_ORIGIN", "https://uraniumcore.github.io")

QUESTIONS_PATH = Path(
    os.environ.get(
        "QUESTIONS_PATH",
        Path(__file__).resolve().parent / "data" / "questions.json",
    )
)

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8080"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
