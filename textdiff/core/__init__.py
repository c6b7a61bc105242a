"""Core diff engine and data models."""
