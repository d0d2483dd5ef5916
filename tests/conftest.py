"""Pytest configuration for blog tests."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


SAMPLE_POST = """Title: Understanding descriptors
Date: 2020-05-01 09:30
Modified: 2020-05-03 12:00
Category: Python
Tags: python, descriptors
Authors: Jane Doe, John Roe
Slug: understanding-descriptors
Summary: How attribute lookup
    really works.

## Lookup order

See the [howto](https://docs.python.org/3/howto/descriptor.html).

```python
x = [not a link](nowhere here)
```
"""


@pytest.fixture
def sample_text():
    return SAMPLE_POST


@pytest.fixture
def write_post(tmp_path):
    """Write a post under tmp_path and return its path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
