# src/agent/__init__.py
"""Runtime wiring: configuration, scheduling, context and the console shell."""
