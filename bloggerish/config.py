import os

# Support path-based routing (e.g., /dev prefix for dev environment)
BASE_PATH = os.getenv("BASE_PATH", "").rstrip("/")

# Upper bound on any submitted field, keeps sanitizer parsing cost bounded
MAX_INPUT_LENGTH = int(os.getenv("MAX_INPUT_LENGTH", "20000"))

PREVIEW_LENGTH = int(os.getenv("PREVIEW_LENGTH", "200"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
