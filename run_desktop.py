#!/usr/bin/env python
"""Launch the fzbarber desktop dashboard without installing the console script."""

from fzbarber.desktop.app import run

if __name__ == "__main__":
    run()
