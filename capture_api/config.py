# capture_api/config.py

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings:
    """
    Runtime configuration read from the environment (and a local .env file).
    """

    def __init__(self):
        self.llm_provider = os.getenv("LLM_PROVIDER", "gemini").strip().lower()

        self.google_api_key = os.getenv("GOOGLE_GENERATIVE_AI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        self.gemini_model = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-001")

        self.openai_api_key = os.getenv("OPENAI_API_KEY")
        self.openai_model = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

        self.image_context = os.getenv("IMAGE_CONTEXT", "a hotel checkout web page")
        self.docs_root = Path(os.getenv("DOCS_ROOT", str(PROJECT_ROOT)))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
