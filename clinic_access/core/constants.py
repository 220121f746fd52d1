"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Bookkeeping columns never reported in a change log.
CHANGE_LOG_IGNORED_FIELDS: frozenset[str] = frozenset({"id", "created_at", "updated_at"})

# Keys whose values are masked before an audit payload is persisted.
AUDIT_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "password", "hashed_password", "secret", "api_key", "token",
    "credentials", "client_secret", "refresh_token", "access_token",
})
AUDIT_REDACTED_VALUE = "[REDACTED]"

# resource_type used by the login/logout audit verbs.
AUTH_RESOURCE_TYPE = "auth"
