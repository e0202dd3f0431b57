"""
Main entry point for the status panel.

Allows invoking the screens via:
    python -m status_panel            # progress screen (default)
    python -m status_panel gauge -p 0.3
    python -m status_panel titles
"""

from status_panel.cli import main

main()
