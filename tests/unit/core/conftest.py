"""Shared fixtures for core unit tests"""

import logging

import pytest

from nyble.core.diagnostics import Diagnostics


SAMPLE_MD = """\
---
title: Sample Page
---
# Heading 1

A paragraph with `code` and a [link](https://example.com).

```rust
fn main() {}
```

See [the docs][docs] and {Other page|other}.

[docs]: https://example.com/docs
"""


@pytest.fixture(name="diagnostics")
def diagnostics_fixture():
    return Diagnostics(log=logging.getLogger("nyble.test"))


@pytest.fixture(name="sample_file")
def sample_file_fixture(tmp_path):
    path = tmp_path / "sample.md"
    path.write_text(SAMPLE_MD)
    return path
