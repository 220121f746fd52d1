"""Infrastructure: persistence, cache, security and store-backed services."""
