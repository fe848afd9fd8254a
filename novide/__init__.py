"""Settings, persisted window state, key and mouse input translation, and a ring buffer for an editor front end."""

__version__ = "0.11.2"