"""Core building blocks shared by the startup sequence and its collaborators."""
