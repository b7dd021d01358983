"""Core constants: cache key parts, resource names and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure.cache.keys and the dashboard resources.
"""

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Scope segments of a cache key
SCOPE_SEGMENT_NETWORK = "network"
SCOPE_SEGMENT_LOCATION = "location"

# Resource names (cache key prefixes)
RESOURCE_DASHBOARD_STATS = "dashboard_stats"
RESOURCE_LOCATION_DETAIL = "location_detail"
RESOURCE_LOCATION_STATS = "location_stats"
RESOURCE_LOCATIONS = "locations"

# Location ids: alphanumeric, hyphen, underscore (e.g. Mongo ObjectIds, slugs)
LOCATION_ID_MAX_LENGTH = 64

# Query parameter used by the internal product search page
SEARCH_QUERY_PARAM = "search"

# Same message for missing and non-disclosable records (no existence oracle)
PUBLIC_NOT_FOUND_MESSAGE = "Product not found"
