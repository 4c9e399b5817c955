"""Tests for ``{{placeholder}}`` rendering."""

from notifier.application.notifications import Template, render


def test_render_substitutes_known_placeholders() -> None:
    assert render("Task {{taskName}} is overdue", {"taskName": "Audit"}) == "Task Audit is overdue"


def test_unknown_placeholders_are_kept_verbatim() -> None:
    rendered = render("Hi {{ name }}, see {{missing}}", {"name": "Bob"})

    assert rendered == "Hi Bob, see {{missing}}"


def test_none_values_keep_the_original_token() -> None:
    assert render("Due {{dueDate}}", {"dueDate": None}) == "Due {{dueDate}}"


def test_dotted_paths_reach_nested_values() -> None:
    variables = {"actor": {"name": "Ada"}, "invoice": {"total": 1250}}

    assert render("{{actor.name}} billed {{invoice.total}}", variables) == "Ada billed 1250"
    assert render("{{actor.email}}", variables) == "{{actor.email}}"


def test_values_are_stringified() -> None:
    assert render("{{flag}} / {{count}}", {"flag": True, "count": 3}) == "true / 3"


def test_empty_variables_return_the_template_unchanged() -> None:
    assert render("Hello {{name}}", {}) == "Hello {{name}}"
    assert render("Hello {{name}}", None) == "Hello {{name}}"
    assert render(None, {"name": "x"}) == ""


def test_literal_text_without_placeholders_is_untouched() -> None:
    assert render("No tokens {here}", {"here": "x"}) == "No tokens {here}"


def test_template_reports_placeholders_and_missing_names() -> None:
    template = Template.parse("{{a}} {{b.c}} {{a}}")

    assert template.placeholders == frozenset({"a", "b.c"})
    assert template.missing({"a": 1}) == frozenset({"b.c"})
    assert template.missing({"a": 1, "b": {"c": 2}}) == frozenset()
