"""Configuration, logging setup and the platform's exception hierarchy."""
