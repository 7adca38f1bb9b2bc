"""Tests for the Criteria base class."""

from unittest.mock import patch

import pytest

from crosscriteria import Criteria, rule
from crosscriteria.constants import Operator
from crosscriteria.exceptions import ConfigurationError, InvalidOperatorError, MissingHandlerError
from crosscriteria.predicates import PredicateBuilder


class UserCriteria(Criteria):
    fields = ["status", ("name", "like"), "age", ("period", "custom")]
    predicates = PredicateBuilder(like_operator="ilike", escape_like=True)

    def criteria_period(self, target, value):
        target.where("created_at", ">=", value)

    @rule("min-age")
    def minimum_age(self, target, value):
        target.where("age", ">=", value)


class TestDeclaration:
    def test_spec_compiled_once_per_class(self):
        assert UserCriteria.spec() is UserCriteria.spec()
        assert UserCriteria.spec().field_names == ("status", "name", "age", "period")
        assert UserCriteria.spec().operator_for("period") == Operator.CUSTOM

    def test_rule_fields(self):
        assert set(UserCriteria.rule_fields()) == {"period", "min_age"}

    def test_unknown_operator_fails_on_class_creation(self):
        with pytest.raises(InvalidOperatorError):

            class Broken(Criteria):
                fields = [("age", "between")]

    def test_custom_field_without_rule_fails(self):
        with pytest.raises(MissingHandlerError) as exc_info:

            class Broken(Criteria):
                fields = [("period", "custom")]

        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.details["method"] == "criteria_period"

    def test_camel_case_custom_field_with_prefixed_rule(self, builder):
        class ByUser(Criteria):
            fields = [("userName", "custom")]

            def criteria_userName(self, target, value):
                target.where("name", "=", value)

        assert ByUser.rule_fields() == ("user_name",)
        ByUser({"userName": "Rei"}).apply(builder)
        assert builder.predicates == [("=", "users.name", "Rei")]

    def test_base_class_has_no_fields(self, builder):
        Criteria({"status": 1}).apply(builder)
        assert builder.predicates == []


class TestApply:
    def test_end_to_end(self, builder):
        params = {"status": [1, 3], "name": "Reishou", "age": 30, "extra": "ignored"}
        UserCriteria(params).apply(builder)
        assert builder.predicates == [
            ("in", "users.status", [1, 3]),
            ("ilike", "users.name", "%Reishou%"),
            ("in", "users.age", [30]),
        ]

    def test_drops_unusable_values(self, builder):
        UserCriteria({"status": None, "name": [], "age": 0}).apply(builder)
        assert builder.predicates == [("in", "users.age", [0])]

    def test_custom_rules(self, builder):
        UserCriteria({"period": "2024-01-01", "min-age": 18}).apply(builder)
        assert builder.predicates == [
            (">=", "users.created_at", "2024-01-01"),
            (">=", "users.age", 18),
        ]

    def test_returns_builder(self, builder):
        assert UserCriteria({}).apply(builder) is builder

    def test_handlers_are_bound_to_instance(self, builder):
        class TenantCriteria(Criteria):
            fields = [("tenant", "custom")]

            def __init__(self, params, tenant_column):
                self.tenant_column = tenant_column
                super().__init__(params)

            def criteria_tenant(self, target, value):
                target.where(self.tenant_column, "=", value)

        TenantCriteria({"tenant": "acme"}, "org_id").apply(builder)
        assert builder.predicates == [("=", "users.org_id", "acme")]


class TestConfigurationSurface:
    def test_method_prefix(self, builder):
        class ScopedCriteria(Criteria):
            fields = ["status"]
            method_prefix = "scope"

            def scope_status(self, target, value):
                target.where("status", "!=", value)

        ScopedCriteria({"status": 1}).apply(builder)
        assert builder.predicates == [("!=", "users.status", 1)]

    def test_keep_value_override(self, builder):
        class StrictCriteria(Criteria):
            fields = ["name", "age"]

            def keep_value(self, value):
                return value not in (None, "", [])

        criteria = StrictCriteria({"name": "", "age": 0})
        criteria.apply(builder)
        assert criteria.params == {"age": 0}
        assert builder.predicates == [("in", "users.age", [0])]

    def test_rules_are_inherited_and_overridable(self, builder):
        class ChildCriteria(UserCriteria):
            def criteria_period(self, target, value):
                target.where("updated_at", ">=", value)

        ChildCriteria({"period": "2024", "min-age": 1}).apply(builder)
        assert builder.predicates == [
            (">=", "users.updated_at", "2024"),
            (">=", "users.age", 1),
        ]
        assert set(ChildCriteria.rule_fields()) == {"period", "min_age"}

    def test_default_prefix_from_settings(self):
        assert Criteria.method_prefix == "criteria"


class TestInstanceState:
    def test_original_snapshot_is_read_only(self):
        params = {"status": None, "age": 1}
        criteria = UserCriteria(params)
        assert dict(criteria.original) == params
        with pytest.raises(TypeError):
            criteria.original["age"] = 2

    def test_original_detached_from_input(self):
        params = {"age": 1}
        criteria = UserCriteria(params)
        params["age"] = 2
        assert criteria.original["age"] == 1
        assert criteria.params == {"age": 1}

    def test_params_filtered(self):
        criteria = UserCriteria({"status": None, "name": "Rei", "extra": {"a": 1}})
        assert criteria.params == {"name": "Rei"}
        assert criteria.has("name")
        assert not criteria.has("status")
        assert criteria.get("name") == "Rei"
        assert criteria.get("status", "default") == "default"

    def test_params_copy(self):
        criteria = UserCriteria({"name": "Rei"})
        criteria.params["name"] = "other"
        assert criteria.get("name") == "Rei"

    @pytest.mark.parametrize("params", [None, [("status", 1)], "status=1"])
    def test_params_must_be_a_mapping(self, params):
        with pytest.raises(TypeError):
            UserCriteria(params)

    def test_repr(self):
        assert repr(UserCriteria({"age": 1})) == "<UserCriteria params={'age': 1}>"


def test_logging_through_engine(builder):
    criteria = UserCriteria({"age": 1})
    with patch.object(criteria._engine.logger, "message") as mock_message:
        criteria.apply(builder)
    mock_message.assert_called_once()
