"""
Tests for the model evaluator and the one-shot predict() entry point.
"""

import json

import pytest

from local_predict import ModelEvaluator, predict
from local_predict.core.errors import ConfigurationError, ParseError
from local_predict.core.types import MissingBranchPolicy
from local_predict.evaluator import locate_model_body, parse_args


class TestScenarios:
    """Worked examples on a two-leaf model."""

    @pytest.mark.parametrize(
        "args,expected",
        [
            ('{"000001": 5}', {"value": "yes", "confidence": 0.9}),
            ('{"000001": 2}', {"value": "no", "confidence": 0.8}),
            ("{}", {"value": "no", "confidence": 0.55}),
        ],
    )
    def test_predict(self, scenario_model, args, expected):
        assert predict(scenario_model, args, False).as_dict() == expected

    def test_predict_by_name(self, scenario_model):
        result = predict(scenario_model, '{"score": 5, "unknown": 1}', args_by_name=True)
        assert result.value == "yes"

    def test_names_ignored_without_by_name(self, scenario_model):
        result = predict(scenario_model, '{"score": 5}', args_by_name=False)
        assert (result.value, result.confidence) == ("no", 0.55)

    def test_categorical_not_equal(self):
        model = {
            "objective_field": "000003",
            "fields": {
                "000002": {"name": "color", "optype": "categorical"},
                "000003": {"name": "label", "optype": "categorical"},
            },
            "root": {
                "predicate": True,
                "output": "red",
                "confidence": 0.5,
                "children": [
                    {
                        "predicate": {"field": "000002", "operator": "!=", "value": "red"},
                        "output": "other",
                        "confidence": 0.7,
                    }
                ],
            },
        }
        assert predict(model, '{"000002": "blue"}').value == "other"
        assert predict(model, '{"000002": "red"}').value == "red"


    def test_empty_operator_suffix(self, scenario_model):
        policy = MissingBranchPolicy(operator_suffix="")
        result = predict(scenario_model, '{"000001": 5}', policy=policy)
        assert (result.value, result.confidence) == ("yes", 0.9)

    def test_nan_argument_stops_at_root(self, scenario_model):
        result = predict(scenario_model, '{"000001": NaN}')
        assert (result.value, result.confidence) == ("no", 0.55)


class TestModelEvaluator:
    """A parsed evaluator answers repeated predictions."""

    def test_resource_shape(self, iris_model):
        evaluator = ModelEvaluator(iris_model)
        assert evaluator.objective_field == "000004"
        assert evaluator.objective_name == "species"
        assert len(evaluator.catalog) == 5

    @pytest.mark.parametrize(
        "args,value,confidence",
        [
            ({"petal length": 1.4}, "Iris-setosa", 0.92865),
            ({"petal length": 5.0, "petal width": 2.0}, "Iris-virginica", 0.88664),
            ({"petal length": 5.0}, "Iris-virginica", 0.88664),
            ({"petal length": 4.0, "petal width": 1.3, "color": "blue"}, "Iris-versicolor", 0.9),
            ({"petal length": 4.0, "petal width": 1.3, "color": "red"}, "Iris-virginica", 0.6),
            ({"petal length": 4.0, "petal width": 1.3}, "Iris-versicolor", 0.82485),
            ({"sepal length": 6.0}, "Iris-virginica", 0.26289),
        ],
    )
    def test_iris(self, iris_model, args, value, confidence):
        result = ModelEvaluator(iris_model).predict(args, by_name=True)
        assert (result.value, result.confidence) == (value, confidence)

    def test_strict_missing_policy(self, iris_model):
        evaluator = ModelEvaluator(iris_model, policy=MissingBranchPolicy(enabled=False))
        result = evaluator.predict({"petal length": 5.0}, by_name=True)
        assert result.confidence == 0.40383

    def test_path(self, iris_model):
        result = ModelEvaluator(iris_model).predict(
            json.dumps({"000002": 4.0, "000003": 1.3, "000005": "red"})
        )
        assert result.path == ["petal length > 2.45", "petal width <= 1.75", "color = red"]
        assert result.count == 5

    def test_evaluator_is_reusable(self, scenario_model):
        evaluator = ModelEvaluator(scenario_model)
        assert evaluator.predict('{"000001": 5}').value == "yes"
        assert evaluator.predict('{"000001": 1}').value == "no"
        assert evaluator.predict('{"000001": 5}').value == "yes"

    def test_ordering_operator_without_operand(self, scenario_model):
        scenario_model["root"]["children"][0]["predicate"]["value"] = None
        with pytest.raises(ConfigurationError, match="needs an operand"):
            ModelEvaluator(scenario_model)

    def test_unknown_objective_field(self, scenario_model):
        scenario_model["objective_field"] = "000099"
        with pytest.raises(ConfigurationError, match="000099"):
            ModelEvaluator(scenario_model)


class TestModelDocumentErrors:
    @pytest.mark.parametrize("key", ["root", "fields", "objective_field"])
    def test_missing_section(self, scenario_model, key):
        del scenario_model[key]
        with pytest.raises(ParseError):
            predict(scenario_model, "{}")

    def test_not_a_mapping(self):
        with pytest.raises(ParseError):
            predict(["root"], "{}")

    def test_objective_from_resource(self, scenario_model):
        objective = scenario_model.pop("objective_field")
        document = {"objective_fields": [objective], "model": scenario_model}
        body, found = locate_model_body(document)
        assert found == "000002"
        assert body is scenario_model


class TestParseArgs:
    def test_json_text(self):
        assert parse_args('{"000001": 1, "000002": "a"}') == {"000001": 1, "000002": "a"}

    def test_mapping(self):
        assert parse_args({"000001": None}) == {"000001": None}

    @pytest.mark.parametrize("payload", ["{not json", "[1, 2]", '"text"', '{"a": [1]}', '{"a": {"b": 1}}'])
    def test_invalid(self, payload):
        with pytest.raises(ParseError):
            parse_args(payload)

    def test_invalid_payload_from_predict(self, scenario_model):
        with pytest.raises(ParseError, match="JSON"):
            predict(scenario_model, "000001=5")
