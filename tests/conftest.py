import sys
from pathlib import Path

import pytest

# Ensure repository root is on the import path for local package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture()
def lecun_work() -> dict:
    return {
        "DOI": "10.1/x",
        "title": ["Deep Learning"],
        "author": [
            {"given": "Y.", "family": "LeCun", "ORCID": "http://orcid.org/0000-0002-1234-5678"}
        ],
        "type": "article",
        "container-title": ["Nature"],
        "published-print": {"date-parts": [[2015]]},
    }
