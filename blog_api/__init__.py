"""Blog management API."""
