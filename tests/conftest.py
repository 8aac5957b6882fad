"""
pytest shared setup

Lets the suite run without `pip install -e .` by putting the project root
(main.py and the recoder package) on sys.path.
"""
import logging
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).resolve().parents[1]

if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _reset_root_logging():
    # main() reconfigures the root logger onto the captured stderr
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.StreamHandler) and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
