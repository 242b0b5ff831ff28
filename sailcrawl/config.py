"""Settings module — environment variables and constants."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env lives at the project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Supabase ---
SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_SECRET_KEY: str = os.environ.get("SUPABASE_SECRET_KEY", "")
SUPABASE_SCHEMA: str = os.environ.get("SUPABASE_SCHEMA", "public")
SAILBOAT_TABLE: str = os.environ.get("SAILBOAT_TABLE", "sailboats")

# --- User-Agent ---
USER_AGENT = os.environ.get(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36",
)

REQUEST_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Pragma": "no-cache",
}

# --- Request settings ---
REQUEST_INTERVAL_MIN = float(os.environ.get("REQUEST_INTERVAL_MIN", "1.0"))
REQUEST_INTERVAL_MAX = float(os.environ.get("REQUEST_INTERVAL_MAX", "3.0"))
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "15"))  # seconds

# --- sailboatdata.com ---
SAILBOATDATA_BASE_URL = "https://sailboatdata.com"
SAILBOATDATA_PAGE_COUNT = 181
SAILBOATDATA_SEARCH_URL_TEMPLATE = (
    "https://sailboatdata.com/?keyword&sort-select&sailboats_per_page=50"
    "&loa_min&loa_max&lwl_min&lwl_max&hull_type&sailboat_units=all"
    "&displacement_min&displacement_max&beam_min&beam_max&draft_max"
    "&bal_disp_min&bal_disp_max&sa_disp_min&sa_disp_max"
    "&disp_len_disp_min&disp_len_disp_max&comfort_ratio_min&comfort_ratio_max"
    "&capsize_ratio_min&capsize_ratio_max&taxonomy_rig"
    "&first_built_after&first_built_before&designer_name&builder_name"
    "&sailboats_first_letter&page_number={page}"
)

# --- yachtworld.com ---
YACHTWORLD_BASE_URL = "https://www.yachtworld.com"
YACHTWORLD_START_URL = "https://www.yachtworld.com/boats-for-sale/type-sail/"

# --- Logging ---
LOG_DIR = Path(os.environ.get("LOG_DIR", _PROJECT_ROOT / "logs"))
