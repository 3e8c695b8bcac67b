"""Core runtime pieces: logging, ports, and path locks."""
