"""Configuration, authentication and logging setup."""
