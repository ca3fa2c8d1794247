"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["memns._pytest_plugin"]

This makes the ``mns`` fixture automatically available::

    def test_something(mns):
        mns.create_entry("notes.txt")
        mns.write_content("notes.txt", "hello")
"""

import pytest

from ._namespace import MemoryNamespace


@pytest.fixture
def mns() -> MemoryNamespace:
    """A fresh :class:`MemoryNamespace` per test (function scope), cwd at root."""
    return MemoryNamespace()
