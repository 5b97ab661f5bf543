"""Shared fixtures for core unit tests"""

import pytest


# Patch text as returned in a provider's per-file 'patch' field (no file headers).
GITHUB_PATCH = (
    "@@ -1,6 +1,6 @@\n"
    " // index.js\n"
    "-// Content reconstructed from Azure DevOps PR diff\n"
    "-// This is a cross-repository review\n"
    "+// Content reconstructed from GitHub PR diff\n"
    "+// This is a GitHub pull request review\n"
    " \n"
    " // Actual file changes are shown below\n"
    "-// Please view full context in Azure DevOps if needed\n"
    "+// Please view full context in GitHub if needed"
)

BEFORE = """\
import os

def main():
    path = os.getcwd()
    print(path)
    return 0

if __name__ == "__main__":
    main()
"""

AFTER = """\
import os
import sys

def main():
    path = os.getcwd()
    print(path, file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
"""


@pytest.fixture(name="github_patch")
def github_patch_fixture():
    return GITHUB_PATCH


@pytest.fixture(name="before_text")
def before_text_fixture():
    return BEFORE


@pytest.fixture(name="after_text")
def after_text_fixture():
    return AFTER
