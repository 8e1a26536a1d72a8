import os
import sys

import pytest

# Ensure the repository root is on sys.path so imports like `import app` and `import calendar_mcp` work
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)


@pytest.fixture
def calendar_payload():
    """A payload that satisfies the calendar contract"""
    return {
        "calendar": [
            {
                "date": f"2026-11-{day:02d}",
                "theme": "Product",
                "title": f"Day {day}: shipping faster",
                "hook": "What slows your releases?",
                "cta": "Read the guide",
            }
            for day in range(1, 31)
        ],
        "linkedin_posts": [{"text": f"Post {i}"} for i in range(5)],
        "hashtags": ["#a", "#b", "#c"],
        "utms": [],
    }
