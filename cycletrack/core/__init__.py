"""Core domain: models, exceptions and configuration."""
