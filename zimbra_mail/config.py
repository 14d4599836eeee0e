"""Configuration and settings."""

import os

from dotenv import load_dotenv

load_dotenv()

# Account (CLI only; the library takes these as arguments)
ZIMBRA_HOST = os.getenv("ZIMBRA_HOST", "").rstrip("/")
ZIMBRA_USER = os.getenv("ZIMBRA_USER", "")
ZIMBRA_PASSWORD = os.getenv("ZIMBRA_PASSWORD", "")

# Service endpoints, relative to the host
SOAP_PATH = os.getenv("ZIMBRA_SOAP_PATH", "/service/soap/")
# fmt=raw strips the HTML wrapper; "raw,extended" answers with unescaped JSON inside the CSV line
UPLOAD_PATH = os.getenv("ZIMBRA_UPLOAD_PATH", "/service/upload?fmt=raw")
CONTENT_PATH = os.getenv("ZIMBRA_CONTENT_PATH", "/service/content/get")
AUTH_COOKIE_NAME = os.getenv("ZIMBRA_AUTH_COOKIE", "ZM_AUTH_TOKEN")

# HTTP
HTTP_TIMEOUT_SECONDS = float(os.getenv("ZIMBRA_HTTP_TIMEOUT", "30.0"))

# Search defaults (fr_CA makes the server read dates in queries as yyyy-mm-dd)
SEARCH_LOCALE = os.getenv("ZIMBRA_SEARCH_LOCALE", "fr_CA")
SEARCH_LIMIT = int(os.getenv("ZIMBRA_SEARCH_LIMIT", "1000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"
LOG_FILE = os.getenv("LOG_FILE", "")  # JSONL output; empty disables the file handler
