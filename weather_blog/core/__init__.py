"""Settings, logging and location configuration."""
