"""Pytest configuration and fixtures for tests."""

import atexit
import os
import shutil
import tempfile

# Set up test environment variables BEFORE any app imports
# This must run at module import time, not in a fixture
_test_data_dir = tempfile.mkdtemp(prefix="ogp_test_")
os.environ.setdefault("PUBLIC_DIR", os.path.join(_test_data_dir, "public"))
os.environ["OGP_GENERATE_ON_STARTUP"] = "false"


def _cleanup_test_dir():
    """Clean up test data directory on exit."""
    shutil.rmtree(_test_data_dir, ignore_errors=True)


# Register cleanup to run when tests finish
atexit.register(_cleanup_test_dir)
