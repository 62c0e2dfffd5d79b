"""Narrative advisor - free-text strategic advice from an external model."""
