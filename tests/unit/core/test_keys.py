"""Unit tests for core/utils/keys.py"""

import pytest

from revdiff.core.utils.hashing import sha256
from revdiff.core.utils.keys import sanitize_path, store_key


def test_sanitize_path_already_clean():
    assert sanitize_path("README") == "README"


def test_sanitize_path_replaces_unsafe_characters():
    cleaned = sanitize_path("src/app.py")
    assert cleaned.startswith("src_app_py_")
    assert cleaned == f"src_app_py_{sha256('src/app.py')[:8]}"


@pytest.mark.parametrize("a,b", [
    ("a-b.ts", "a_b.ts"),
    ("src/x.py", "src_x.py"),
    ("a b", "a.b"),
])
def test_sanitize_path_distinct_paths_stay_distinct(a, b):
    assert sanitize_path(a) != sanitize_path(b)


def test_sanitize_path_is_deterministic():
    assert sanitize_path("dir/file.txt") == sanitize_path("dir/file.txt")


def test_store_key_format():
    key = store_key("github", "42", "src/app.py")
    assert key == f"github_42_{sanitize_path('src/app.py')}"


def test_store_key_differs_by_review():
    assert store_key("github", "1", "f") != store_key("github", "2", "f")
