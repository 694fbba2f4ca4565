"""Storage adapters for worklog."""
