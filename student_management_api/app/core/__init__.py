"""Configuration, logging, database plumbing and error taxonomy."""
