"""Root conftest for test suite - adds src to Python path."""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path so the package imports without installation
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture
def provider_payload() -> dict:
    """A JigsawStack web search reply for "capital of France"."""
    return {
        "success": True,
        "query": "capital of France",
        "ai_overview": "Paris is the capital and most populous city of France.",
        "is_safe": True,
        "spell_fixed": False,
        "image_urls": [f"https://images.example.com/paris-{i}.jpg" for i in range(1, 6)],
        "results": [
            {
                "title": "Paris - Wikipedia",
                "url": "https://en.wikipedia.org/wiki/Paris",
                "description": "<strong>Paris</strong> is the capital of France.",
                "content": None,
                "site_name": "Wikipedia",
                "site_long_name": "en.wikipedia.org",
                "age": "2 days ago",
                "language": "en",
                "is_safe": True,
                "favicon": "https://en.wikipedia.org/favicon.ico",
                "snippets": ["Paris is the capital of France. " * 10, "Short excerpt.", "Third."],
            },
            {
                "title": "Paris | History, Map, Population",
                "url": "https://www.britannica.com/place/Paris",
                "description": "Paris, city and capital of France.",
                "content": "Paris, city and capital of France, situated in the north-central part.",
                "site_name": "Britannica",
                "site_long_name": "www.britannica.com",
                "language": "en",
                "is_safe": True,
                "thumbnail": "https://cdn.britannica.com/paris.jpg",
                "snippets": [],
            },
            {
                "title": "Visit Paris",
                "url": "https://parisjetaime.com/eng/",
                "description": "Official website of the Paris tourist office.",
                "content": None,
                "site_name": "Paris je t'aime",
                "site_long_name": "parisjetaime.com",
                "language": "en",
                "is_safe": True,
                "snippets": ["Discover Paris."],
            },
        ],
    }
