"""
Entry point for running the importmock CLI as a module.

Usage: python -m importmock [command] [options]
"""

from importmock.cli.parser import main

if __name__ == "__main__":
    main()
