"""
Early pytest configuration plugin.

This file is loaded early by pytest to set up the test environment
before any test modules are imported.
"""

import os
import sys

# this repo's tests package must shadow any installed top-level "tests"
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def pytest_configure(config):
    """
    Keep the host's client configuration out of the test run.

    This hook runs before collection, so no module sees a real
    /etc/tacplus/client.conf or a shared secret from the developer's shell.
    """
    os.environ["TACACS_CONFIG"] = os.devnull + ".tacplus-test"
    os.environ.pop("TACACS_SECRET", None)
    os.environ.setdefault("TACACS_LOG_LEVEL", "WARNING")

    print("[pytest_configure] TACACS+ client test mode enabled", file=sys.stderr)
