import os
from dotenv import load_dotenv

load_dotenv()

# --- Application ---
APP_NAME = os.getenv("APP_NAME", "FinTrack")
APP_VERSION = os.getenv("APP_VERSION", "0.0.39")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Supabase Configuration ---
SUPABASE_URL = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

# Applied to every PostgREST / GoTrue request made by the REST gateway
GATEWAY_TIMEOUT_SECONDS = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10"))

# --- Finance defaults ---
CURRENCY_CODE = os.getenv("CURRENCY_CODE", "INR")
CURRENCY_SYMBOL = "₹"
DEFAULT_TAX_REGIME = os.getenv("DEFAULT_TAX_REGIME", "new")
DEFAULT_RISK_PROFILE = os.getenv("DEFAULT_RISK_PROFILE", "moderate")
RECOMMENDATION_TTL_DAYS = int(os.getenv("RECOMMENDATION_TTL_DAYS", "30"))
GOALS_DUE_SOON_DAYS = int(os.getenv("GOALS_DUE_SOON_DAYS", "30"))
