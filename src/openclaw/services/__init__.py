"""Collaborators called by the startup orchestrator.

Each covers the call contract the startup
sequence relies on and keeps its state process-wide.
"""
