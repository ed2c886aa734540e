"""Global pytest configuration.

Shared capacity networks live in `tests.lib.algorithms.sample_graphs` and are
registered here as a fixture plugin, so any test module can request them by
name. The plugin is named rather than imported so that pytest imports it
itself with assertion rewriting enabled.
"""

from __future__ import annotations

from importlib.util import find_spec

pytest_plugins: list[str] = []
if find_spec("tests.lib.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.lib.algorithms.sample_graphs"]
