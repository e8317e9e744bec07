"""Tests for Verdict."""

from ability_manager import Rule, Verdict


def test_no_match():
    v = Verdict.no_match()
    assert v.result is False
    assert v.rule is None
    assert v.allowed is False
    assert v.matched is False
    assert v.granted is False


def test_allowed_follows_truthiness():
    rule = Rule.create("read", "Product")
    assert Verdict(result=True, rule=rule).allowed is True
    assert Verdict(result="because", rule=rule).allowed is True
    assert Verdict(result="", rule=rule).allowed is False
    assert Verdict(result=None, rule=rule).allowed is False


def test_matched_with_falsy_result():
    v = Verdict(result=False, rule=Rule.create("read", "Product"))
    assert v.matched is True
    assert v.allowed is False


def test_immutable():
    v = Verdict.no_match()
    try:
        v.result = True  # type: ignore[misc]
        raise AssertionError("Should have raised")
    except AttributeError:
        pass


def test_granted_is_strict():
    rule = Rule.create("read", "Product")
    assert Verdict(result=True, rule=rule).granted is True
    assert Verdict(result="because", rule=rule).granted is False
    assert Verdict(result=1, rule=rule).granted is False
    assert Verdict.no_match().granted is False
