#!/usr/bin/env python
"""Centralized constants for the request/response façade.

This module keeps the fixed literals used across the package in one place:
timeouts, status codes, JSON diagnostics, multipart upload literals and the
offline alert texts.
"""

from typing import Final

# Request constants
DEFAULT_TIMEOUT_SECONDS: Final[float] = 60.0  # Fixed timeout applied to every request
CONTENT_LENGTH_HEADER: Final[str] = "Content-Length"
CONTENT_TYPE_HEADER: Final[str] = "Content-Type"
ALLOWED_URL_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})

# HTTP client configuration
DEFAULT_USER_AGENT: Final[str] = "adconnect/0.1"
DEFAULT_ACCEPT_HEADER: Final[str] = "application/json"
DEFAULT_MAX_CONNECTIONS: Final[int] = 10
MAX_CONNECT_TIMEOUT_SECONDS: Final[float] = 10.0

# HTTP status codes
HTTP_OK: Final = 200  # The only status treated as success

# JSON decoding diagnostics
JSON_ERROR_DOMAIN: Final[str] = "ADConnectionManager"
JSON_ERROR_CODE: Final[int] = 501
JSON_ERROR_MESSAGE: Final[str] = "Error occurred in JSON parsing"

# Query string encoding
QUERY_PAIR_SEPARATOR: Final[str] = "&"
QUERY_KEY_VALUE_SEPARATOR: Final[str] = "="
QUERY_PREFIX: Final[str] = "?"
# RFC 3986 unreserved characters besides ASCII letters and digits
URL_SAFE_CHARACTERS: Final[str] = "-_.~"

# Reachability probe (UDP connect only, no packet is sent)
DEFAULT_PROBE_HOST: Final[str] = "8.8.8.8"
DEFAULT_PROBE_PORT: Final[int] = 53

# Multipart photo upload literals
MULTIPART_BOUNDARY: Final[str] = "---------------------------14737809831466499882746641449"
MULTIPART_FIELD_NAME: Final[str] = "uploadedfile"
MULTIPART_FILE_NAME: Final[str] = "abc.png"
MULTIPART_FILE_CONTENT_TYPE: Final[str] = "application/octet-stream"

# Offline alert texts
OFFLINE_ALERT_TITLE: Final[str] = "Internet Status"
OFFLINE_ALERT_MESSAGE: Final[str] = "Internet connection is not available"
OFFLINE_ALERT_OK_BUTTON: Final[str] = "Ok"

# Log levels accepted by the configuration layer
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
