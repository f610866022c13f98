import os

# Logging
LOG_LEVEL: str = os.getenv("STEPCHECK_LOG_LEVEL", "INFO").upper()

# Diagnostics summary: how many issues the status panel lists
SUMMARY_TOP_ISSUES: int = int(os.getenv("STEPCHECK_SUMMARY_TOP_ISSUES", "6"))

# Feature toggles
ENABLE_PROMETHEUS: bool = os.getenv("ENABLE_PROMETHEUS", "true").lower() == "true"

# HTTP API bind address
API_HOST: str = os.getenv("STEPCHECK_API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("STEPCHECK_API_PORT", "8000"))
