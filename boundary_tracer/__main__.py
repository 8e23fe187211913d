"""
Main entry point for the boundary tracer.

Allows running: python -m boundary_tracer <command>
"""

import sys
from boundary_tracer.cli import main

if __name__ == "__main__":
    sys.exit(main())
