"""HTTP API for fitcoach."""
