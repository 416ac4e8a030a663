"""Core domain: models, state, interfaces and services."""
