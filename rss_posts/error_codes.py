"""Stable failure codes for fetch, parse and config stages.

Used by: fetcher, feed_config, pipeline, log events.
"""

FETCH_TIMEOUT = "FETCH_TIMEOUT"
FETCH_HTTP = "FETCH_HTTP"          # Non-2xx response
FETCH_NETWORK = "FETCH_NETWORK"    # DNS, connection refused, TLS, etc.
PARSE_ERROR = "PARSE_ERROR"

CONFIG_INVALID = "CONFIG_INVALID"  # Locale file unreadable or rss block fails validation
LOCALE_FAILED = "LOCALE_FAILED"    # Unexpected error while assembling one locale
