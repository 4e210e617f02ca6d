"""
Pytest configuration for local-predict tests.

Model documents here follow the shape the hosted service exports:
a fields map, an objective field and a root node whose children carry
predicates.
"""

import copy

import pytest

from local_predict.core.config import get_settings


SCENARIO_MODEL = {
    "objective_field": "000002",
    "fields": {
        "000001": {"name": "score", "optype": "numeric"},
        "000002": {"name": "approved", "optype": "categorical"},
    },
    "root": {
        "predicate": True,
        "output": "no",
        "confidence": 0.55,
        "count": 20,
        "children": [
            {
                "predicate": {"field": "000001", "operator": ">", "value": 3},
                "output": "yes",
                "confidence": 0.9,
                "count": 9,
            },
            {
                "predicate": {"field": "000001", "operator": "<=", "value": 3},
                "output": "no",
                "confidence": 0.8,
                "count": 11,
            },
        ],
    },
}


IRIS_MODEL = {
    "resource": "model/5143a51a37203f2cf7000972",
    "object": {
        "objective_fields": ["000004"],
        "model": {
            "fields": {
                "000000": {"name": "sepal length", "optype": "numeric", "column_number": 0},
                "000002": {"name": "petal length", "optype": "numeric", "column_number": 2},
                "000003": {"name": "petal width", "optype": "numeric", "column_number": 3},
                "000004": {"name": "species", "optype": "categorical", "column_number": 4},
                "000005": {"name": "color", "optype": "categorical", "column_number": 5},
            },
            "root": {
                "predicate": True,
                "output": "Iris-virginica",
                "confidence": 0.26289,
                "count": 150,
                "children": [
                    {
                        "predicate": {"field": "000002", "operator": "<=", "value": 2.45},
                        "output": "Iris-setosa",
                        "confidence": 0.92865,
                        "count": 50,
                    },
                    {
                        "predicate": {"field": "000002", "operator": ">", "value": 2.45},
                        "output": "Iris-virginica",
                        "confidence": 0.40383,
                        "count": 100,
                        "children": [
                            {
                                "predicate": {"field": "000003", "operator": ">*", "value": 1.75},
                                "output": "Iris-virginica",
                                "confidence": 0.88664,
                                "count": 46,
                            },
                            {
                                "predicate": {"field": "000003", "operator": "<=", "value": 1.75},
                                "output": "Iris-versicolor",
                                "confidence": 0.82485,
                                "count": 54,
                                "children": [
                                    {
                                        "predicate": {"field": "000005", "operator": "/=", "value": "red"},
                                        "output": "Iris-versicolor",
                                        "confidence": 0.9,
                                        "count": 49,
                                    },
                                    {
                                        "predicate": {"field": "000005", "operator": "=", "value": "red"},
                                        "output": "Iris-virginica",
                                        "confidence": 0.6,
                                        "count": 5,
                                    },
                                ],
                            },
                        ],
                    },
                ],
            },
        },
    },
}


@pytest.fixture
def scenario_model():
    """Two-leaf model on one numeric field."""
    return copy.deepcopy(SCENARIO_MODEL)


@pytest.fixture
def iris_model():
    """Three-level model wrapped in the service's resource shape."""
    return copy.deepcopy(IRIS_MODEL)


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch, tmp_path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.setenv("LOCAL_PREDICT_MODEL_STORAGE_PATH", str(tmp_path / "models"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
