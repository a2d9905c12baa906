"""Data models for Focus Companion CLI."""
