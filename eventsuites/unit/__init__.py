"""Offline framework tests against in-memory page doubles."""
