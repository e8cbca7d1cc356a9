"""Helpers shared by the pipeline, the store and the dashboard."""
