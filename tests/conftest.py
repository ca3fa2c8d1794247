import pytest

pytest_plugins = ["memns._pytest_plugin"]


@pytest.fixture
def populated(mns):
    """/foo/bar/f containing "hi", plus an empty /docs directory; cwd at root."""
    mns.mkdir("foo")
    mns.change_directory("foo")
    mns.mkdir("bar")
    mns.change_directory("bar")
    mns.touch("f")
    mns.write_content("f", "hi")
    mns.change_directory("/")
    mns.mkdir("docs")
    return mns
