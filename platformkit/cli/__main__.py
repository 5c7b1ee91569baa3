"""
Entry point for running the platformkit CLI as a module.

Usage: python -m platformkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
