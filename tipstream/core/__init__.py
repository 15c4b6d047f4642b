"""Core application plumbing: configuration, logging and dependencies."""
