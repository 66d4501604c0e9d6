"""
Pytest configuration and shared fixtures.
This file ensures the project root and the tests directory are in sys.path
so test modules can import the application packages and ``test_fixtures``.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
tests_dir = Path(__file__).parent
for path in (project_root, tests_dir):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Fixtures must be visible to every test module, not only to importers
from test_fixtures import (  # noqa: E402,F401
    aggregation,
    db_session,
    favorites_service,
    goal_store,
    meal_repository,
    meal_service,
)
