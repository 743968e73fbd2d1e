from __future__ import annotations

from icm_jobrunner.core.domain.assertions import AssertionResult


def test_new_result_succeeds_and_summarizes_to_empty_string() -> None:
    result = AssertionResult()

    assert result.succeeded()
    assert result.failures == []
    assert result.summarize() == ""
    assert result.summarize("; ") == ""


def test_add_failure_substitutes_placeholders_in_order() -> None:
    result = AssertionResult()

    result.add_failure("Call returned status code {}. Expected {}.", 404, 200)

    assert not result.succeeded()
    assert result.failures == ["Call returned status code 404. Expected 200."]


def test_extra_placeholders_stay_untouched() -> None:
    result = AssertionResult()

    result.add_failure("first {} second {}", "a")

    assert result.failures == ["first a second {}"]


def test_value_containing_braces_does_not_consume_next_placeholder() -> None:
    result = AssertionResult()

    result.add_failure(
        "Call returned wrong content type '{}'. Expected {}.", "text/{}", "application/json"
    )

    assert result.failures == ["Call returned wrong content type 'text/{}'. Expected application/json."]


def test_surplus_values_are_ignored() -> None:
    result = AssertionResult()

    result.add_failure("only {}", "a", "b")

    assert result.failures == ["only a"]


def test_summarize_joins_with_separator() -> None:
    result = AssertionResult()
    result.add_failure("one")
    result.add_failure("two")

    assert result.summarize() == "one\ntwo"
    assert result.summarize("; ") == "one; two"


def test_failures_returns_a_copy() -> None:
    result = AssertionResult()
    result.add_failure("one")

    result.failures.append("two")

    assert result.failures == ["one"]
