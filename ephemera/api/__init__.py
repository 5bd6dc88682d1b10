"""HTTP API: versioned REST endpoints and the static file route."""
