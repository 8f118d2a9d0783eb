"""Core shared definitions for the socialbingo application."""
