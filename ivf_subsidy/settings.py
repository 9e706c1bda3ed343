import os
from datetime import date
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    APP_VERSION: str = "1.0.0"
    RULESET_VERSION: str = "ivf-2.0+3.0-2023.07"
    SCHEMA_VERSION: str = "v1-history"

    # --- CONFIG ---
    ENV = os.getenv("IVF_ENV", "production")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./ivf_subsidy.db")
    SQL_ECHO = os.getenv("IVF_SQL_ECHO", "0") == "1"

    # --- RULES / RETENTION ---
    HISTORY_CAP = int(os.getenv("IVF_HISTORY_CAP", "10"))
    SCHEME_CUTOVER_DATE = date.fromisoformat(os.getenv("IVF_SCHEME_CUTOVER_DATE", "2023-07-01"))


@lru_cache
def get_settings():
    return Settings()
