"""
Pytest configuration for the boundary tracer test suite.

This file ensures the project root is in the Python path
so tests can import boundary_tracer.* and tests.fixtures.* modules.
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))
