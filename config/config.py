import os
from dotenv import load_dotenv

load_dotenv()  # Automatically loads from `.env` or `.env.local`

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "INFO").upper()

## FMC Connection Settings
FMC_BASE_URL = os.getenv("FMC_BASE_URL", "https://fmcrestapisandbox.cisco.com")
FMC_USERNAME = os.getenv("FMC_USERNAME", "")
FMC_PASSWORD = os.getenv("FMC_PASSWORD", "")
FMC_VERIFY_SSL = os.getenv("FMC_VERIFY_SSL", "true").lower() in ("true", "1", "yes")
FMC_TIMEOUT = float(os.getenv("FMC_TIMEOUT", "30"))

## Dev Proxy Settings
FMC_PROXY_PREFIX = "/" + os.getenv("FMC_PROXY_PREFIX", "/fmc").strip("/")
FMC_PROXY_HOST = os.getenv("FMC_PROXY_HOST", "127.0.0.1")
FMC_PROXY_PORT = int(os.getenv("FMC_PROXY_PORT", "5173"))
