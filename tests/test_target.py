"""Tests for QueryTarget."""

from crosscriteria.target import QueryTarget


def test_qualify(builder):
    target = QueryTarget(builder)
    assert target.table == "users"
    assert target.qualify("status") == "users.status"


def test_qualified_names_left_alone(builder):
    assert QueryTarget(builder).qualify("orders.status") == "orders.status"


def test_empty_table_leaves_field_unqualified(make_builder):
    assert QueryTarget(make_builder("")).qualify("status") == "status"


def test_explicit_table_skips_lookup(builder):
    target = QueryTarget(builder, table="u")
    assert builder.table_lookups == 0
    assert target.qualify("status") == "u.status"


def test_forwards_predicates(builder):
    target = QueryTarget(builder)
    assert target.where_in("status", (1, 2)) is target
    assert target.where("name", "ilike", "%a%") is target
    assert builder.predicates == [("in", "users.status", [1, 2]), ("ilike", "users.name", "%a%")]
    assert target.builder is builder


def test_repr(builder):
    assert repr(QueryTarget(builder)) == "<QueryTarget table='users' builder=RecordingBuilder>"
