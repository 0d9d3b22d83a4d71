import pytest

from pulsarlang.constraints import (
    AffineEnvironment,
    AffineResourceError,
    UnificationConstraint,
)


def test_plain_constraint_origin_is_itself():
    c = UnificationConstraint("a", "b")
    assert c.origin_expected() == "a"
    assert c.origin_actual() == "b"
    assert c.immediate() is None


def test_derived_constraint_reports_root_origin():
    root = UnificationConstraint("root_e", "root_a")
    mid = UnificationConstraint.derived("mid_e", "mid_a", root)
    leaf = UnificationConstraint.derived("leaf_e", "leaf_a", mid)
    assert leaf.origin_expected() == "root_e"
    assert leaf.origin_actual() == "root_a"
    assert leaf.expected == "leaf_e"
    assert leaf.actual == "leaf_a"
    assert leaf.source is mid


def test_immediate_returns_self_for_derived():
    root = UnificationConstraint(1, 2)
    child = UnificationConstraint.derived(3, 4, root)
    assert child.immediate() is child


def test_constraints_compare_by_identity():
    a = UnificationConstraint(1, 2)
    b = UnificationConstraint(1, 2)
    assert a != b
    assert len({a, b}) == 2


def test_root_allows_repeated_take():
    env = AffineEnvironment("fix it")
    env.take("s1", "r")
    env.take("s2", "r")
    assert env.nesting == 0


def test_local_scope_rejects_second_take():
    env = AffineEnvironment("separate them")
    env.enter_local()
    env.take("first", "res")
    with pytest.raises(AffineResourceError) as info:
        env.take("second", "res")
    err = info.value
    assert err.owner == "first"
    assert err.taker == "second"
    assert err.owned == "res"
    assert err.taken == "res"
    assert err.fix == "separate them"


def test_distinct_resources_do_not_conflict():
    env = AffineEnvironment("fix")
    env.enter_local()
    env.take("a", 1)
    env.take("b", 2)
    with pytest.raises(AffineResourceError) as info:
        env.take("c", 2)
    assert info.value.owner == "b"


def test_leaving_last_scope_forgets_resources():
    env = AffineEnvironment("fix")
    env.enter_local()
    env.take("a", "r")
    env.exit_local()
    env.enter_local()
    env.take("b", "r")
    with pytest.raises(AffineResourceError) as info:
        env.take("c", "r")
    assert info.value.owner == "b"


def test_nested_exit_keeps_resources():
    env = AffineEnvironment("fix")
    env.enter_local()
    env.enter_local()
    env.take("a", "r")
    env.exit_local()
    assert env.nesting == 1
    with pytest.raises(AffineResourceError):
        env.take("b", "r")


def test_root_take_conflicts_once_scope_opens():
    env = AffineEnvironment("fix")
    env.take("root", "r")
    env.enter_local()
    with pytest.raises(AffineResourceError) as info:
        env.take("inner", "r")
    assert info.value.owner == "root"


def test_exit_without_scope_raises():
    env = AffineEnvironment("fix")
    with pytest.raises(ValueError):
        env.exit_local()