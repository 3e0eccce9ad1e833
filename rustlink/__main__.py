"""
Entry point for running rustlink as a module.

Usage: python -m rustlink [command] [options]
"""

from rustlink.cli.parser import main

if __name__ == "__main__":
    main()
