import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EnvironmentConfig:
    app_env: str = "development"
    log_level: str = "INFO"
    # Gemini integration; an empty key means the gateway is not configured
    gemini_api_key: str = ""
    gemini_api_base: str = "https://generativelanguage.googleapis.com"
    gemini_model: str = "gemini-1.5-flash"
    gemini_timeout: float = 60.0
    # Serve a canned response instead of failing when no key is set
    mock_caption: bool = False
    # Upper bound for the sentence-splitting fallback of the caption parser
    caption_max_sentences: int = 10
    caption_history_limit: int = 50
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "EnvironmentConfig":
        """Resolve configuration from the process environment and `.env`.

        Called once by the app factory; the resulting object is passed down
        explicitly instead of being read from globals.
        """
        # .env values override empty defaults coming from the container environment.
        load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"), override=True)

        origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
        return cls(
            app_env=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            gemini_api_base=os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com"),
            gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
            gemini_timeout=float(os.getenv("GEMINI_TIMEOUT", "60")),
            mock_caption=_as_bool(os.getenv("MOCK_CAPTION", "false")),
            caption_max_sentences=int(os.getenv("CAPTION_MAX_SENTENCES", "10")),
            caption_history_limit=int(os.getenv("CAPTION_HISTORY_LIMIT", "50")),
            cors_allow_origins=origins or ["*"],
        )
