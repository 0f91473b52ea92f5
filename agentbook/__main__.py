"""
Module entrypoint for the AgentBook CLI.

This file exists so that `python -m agentbook ...` works when the console-script
wrapper is not installed. It contains no business logic.
"""

from __future__ import annotations

from agentbook.cli import main


def _run() -> None:
    """Execute the AgentBook command line interface."""
    raise SystemExit(main())


if __name__ == "__main__":
    _run()
