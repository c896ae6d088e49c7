"""
Pytest configuration for prim3d tests.
Adds the src directory to sys.path so that 'import prim3d' works without an install.
"""
import sys
from pathlib import Path

src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))
