# src/vector_kit/observability/names.py

"""Standard metric names for vector-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Units are handled by the metrics backend (e.g., converted to seconds in Prometheus).
"""

# ============================================================================
# Record Store Metrics
# ============================================================================

# Duration
STORE_INSERT_DURATION = "store_insert_duration"
STORE_UPDATE_DURATION = "store_update_duration"
STORE_DELETE_DURATION = "store_delete_duration"
STORE_SCAN_DURATION = "store_scan_duration"

# Counters
STORE_OPERATIONS_TOTAL = "store_operations_total"
STORE_ERRORS_TOTAL = "store_errors_total"

# Gauges
STORE_RECORDS = "store_records"


# ============================================================================
# Search Metrics
# ============================================================================

# Duration
SEARCH_DURATION = "search_duration"

# Counters
SEARCH_REQUESTS_TOTAL = "search_requests_total"
SEARCH_SKIPPED_RECORDS_TOTAL = "search_skipped_records_total"

# Gauges
SEARCH_CANDIDATES = "search_candidates"
