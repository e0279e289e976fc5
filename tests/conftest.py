"""Pytest configuration and fixtures."""

import os

import pytest

from a2ui_core.core import configure_logging, get_settings
from a2ui_core.core.config import Settings
from a2ui_core.data import DataStore
from a2ui_core.function import FunctionEvaluator
from a2ui_core.state import SurfaceProcessor


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["A2UI_LOG_LEVEL"] = "DEBUG"
    os.environ["A2UI_JSON_LOGS"] = "false"
    configure_logging(level="DEBUG", json_logs=False)


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture
def small_settings():
    """Settings with tight limits for boundary tests."""
    return Settings(max_call_depth=2, max_json_depth=6, regex_cache_size=2)


# ============================================================================
# Component Fixtures
# ============================================================================

@pytest.fixture
def store():
    """Data store with a small user/items tree."""
    return DataStore(
        {
            "user": {"name": "Ada", "age": 36, "admin": True, "email": "ada@example.com"},
            "items": [{"name": "Apple", "price": 1.25}, {"name": "Pear", "price": 2}],
            "tags": ["a", "b", 3],
        }
    )


@pytest.fixture
def evaluator(settings):
    """Function evaluator."""
    return FunctionEvaluator(settings)


@pytest.fixture
def processor(settings):
    """Empty surface processor."""
    return SurfaceProcessor(settings)


@pytest.fixture
def sample_operations():
    """Operations building one surface with components and data."""
    return [
        {
            "createSurface": {
                "surfaceId": "main",
                "catalogId": "https://a2ui.org/catalogs/standard",
                "theme": {"primaryColor": "#3366ff"},
            }
        },
        {
            "updateComponents": {
                "surfaceId": "main",
                "components": [
                    {"id": "root", "component": "Column", "children": ["title", "list"]},
                    {"id": "title", "component": "Text", "text": {"path": "/title"}, "variant": "h1"},
                    {
                        "id": "list",
                        "component": "List",
                        "children": {"componentId": "row", "path": "/items"},
                        "weight": 1,
                    },
                ],
            }
        },
        {
            "updateDataModel": {
                "surfaceId": "main",
                "path": "/",
                "value": {"title": "Groceries", "items": [{"name": "Apple"}, {"name": "Pear"}]},
            }
        },
    ]
