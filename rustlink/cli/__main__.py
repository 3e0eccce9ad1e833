"""
Entry point for running the rustlink CLI as a module.

Usage: python -m rustlink.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
