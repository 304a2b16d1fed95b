"""Embedded payloads staged onto the filesystem at every launch."""
