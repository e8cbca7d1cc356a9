"""Durable local state: artifact history and the session collaborator."""
