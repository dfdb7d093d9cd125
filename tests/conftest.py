"""
Shared fixtures for the test suite: thread records and a small catalog payload
in the shape the 4chan catalog endpoint returns.
"""

import pytest

from chansearch.core.models import ThreadRecord


@pytest.fixture
def make_thread():
    """Factory for thread records with sensible defaults."""
    def _make(**kwargs):
        defaults = {
            "number": "1",
            "board_abv": "g",
            "title": "",
            "comment": "",
            "image_url": "",
            "replies": 0,
        }
        defaults.update(kwargs)
        return ThreadRecord(**defaults)
    return _make


@pytest.fixture
def sample_catalog():
    """Two catalog pages with a mix of image and text-only threads."""
    return [
        {
            "page": 1,
            "threads": [
                {
                    "no": 1001,
                    "now": "01/01/24(Mon)10:00:00",
                    "sub": "Desktop thread",
                    "com": "Post your <b>desktops</b> &amp; setups",
                    "tim": 1704103200000,
                    "ext": ".png",
                    "replies": 120,
                    "images": 80,
                    "last_modified": 1704110000,
                },
                {
                    "no": 1002,
                    "now": "01/01/24(Mon)11:00:00",
                    "sub": "Text only",
                    "com": "no image here",
                    "replies": 4,
                    "images": 0,
                },
            ],
        },
        {
            "page": 2,
            "threads": [
                {
                    "no": 1003,
                    "sub": "",
                    "com": "Old desktop photos",
                    "tim": 1704103300000,
                    "ext": ".jpeg",
                    "replies": 9,
                    "images": 9,
                },
            ],
        },
    ]
