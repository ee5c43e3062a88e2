"""Punto de entrada: python -m journey_tool."""

from __future__ import annotations

from journey_tool.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
