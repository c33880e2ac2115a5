"""chartdeps: Dependency and shared-dependency status reporting for charts."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "Apache-2.0"
