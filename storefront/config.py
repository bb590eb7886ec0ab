"""Runtime configuration defaults for the API client and UI."""

from __future__ import annotations

import os

_API_BASE_URL_ENV = "STOREFRONT_API_BASE_URL"
_DEBUG_LOG_ENV = "STOREFRONT_DEBUG_LOG"

API_BASE_URL = os.environ.get(_API_BASE_URL_ENV, "").strip().rstrip("/") or "http://localhost:5000"
HTTP_TIMEOUT_SECONDS = 10.0

DEBUG_LOG_PATH = os.environ.get(_DEBUG_LOG_ENV, "").strip() or "/tmp/storefront-debug.log"

DEFAULT_CUSTOMER_NAME = "Customer"
ORDER_SUCCESS_NOTIFICATION_MS = 5000
