"""Configuration layer: settings, settings-file discovery, logging setup."""
