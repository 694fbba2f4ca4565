"""Command modules for worklog."""
