"""Pytest configuration for the two_point_interpolation package.

This file ensures the package can be imported without installation.
"""

import importlib.util
import sys
from pathlib import Path

package_root = Path(__file__).parent
src_dir = package_root / "src"

# Always reload to pick up changes
for name in [k for k in sys.modules if k == "two_point_interpolation" or k.startswith("two_point_interpolation.")]:
    del sys.modules[name]

# Make 'src' importable as 'two_point_interpolation'
spec = importlib.util.spec_from_file_location(
    "two_point_interpolation",
    src_dir / "__init__.py",
    submodule_search_locations=[str(src_dir)],
)
two_point_interpolation = importlib.util.module_from_spec(spec)
sys.modules["two_point_interpolation"] = two_point_interpolation
spec.loader.exec_module(two_point_interpolation)
