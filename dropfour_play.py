#!/usr/bin/env python3
"""Entry point for the drop-four console game."""

from dropfour.cli import main


if __name__ == "__main__":
    main()
