import pytest

from formguard.exceptions import PassInProgressError
from formguard.models.fields import FieldDescriptor, FieldSet, Group
from formguard.validators import PassState, Violation, ViolationKind, ValidationEngine


def _kinds(engine: ValidationEngine) -> list[tuple[str, ViolationKind]]:
    return [(v.field_id, v.kind) for v in engine.violations]


def test_engine_starts_invalid_before_any_pass(engine):
    assert engine.valid is False
    assert engine.state == PassState.INIT
    assert engine.custom_validations == []


def test_required_empty_field_raises_required_violation(engine, presenter, make_field):
    name = make_field("name", required=True)

    assert engine.run_pass(FieldSet([name])) is False
    assert _kinds(engine) == [("name", ViolationKind.REQUIRED)]
    assert presenter.is_marked("g-name")
    assert presenter.kinds_for("g-name") == {ViolationKind.REQUIRED}


def test_empty_optional_field_raises_nothing(engine, presenter, make_field):
    assert engine.run_pass(FieldSet([make_field("nickname")])) is True
    assert engine.violations == []
    assert presenter.error_groups == {}


def test_valid_non_empty_fields_raise_nothing(engine, make_field):
    fields = FieldSet([
        make_field("email", type="email", value="a@b.com", required=True),
        make_field("age", type="number", value="4", min="2", max="7", step="2"),
        make_field("code", type="text", value="abc", pattern="[a-c]+", maxlength=3),
    ])

    assert engine.run_pass(fields) is True
    assert engine.violations == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"type": "email", "value": "A@B.com"},
        {"type": "number", "value": "5", "min": "2", "max": "7", "step": "2"},
        {"type": "number", "value": "2.5"},
        {"type": "text", "value": "abcd", "maxlength": 3},
        {"type": "tel", "value": "12ab", "pattern": r"\d+"},
    ],
)
def test_bad_values_raise_value_violation(engine, make_field, kwargs):
    assert engine.run_pass(FieldSet([make_field("f", **kwargs)])) is False
    assert _kinds(engine) == [("f", ViolationKind.VALUE)]


def test_length_overflow_fails_even_when_type_check_passes(engine, make_field):
    field = make_field("f", type="email", value="a@b.com", maxlength=3)

    assert engine.run_pass(FieldSet([field])) is False
    assert _kinds(engine) == [("f", ViolationKind.VALUE)]


def test_same_as_mismatch_raises_special_violation(engine, presenter, make_field):
    a = make_field("a", value="x")
    b = make_field("b", value="y", same_as="a")

    assert engine.run_pass(FieldSet([a, b])) is False
    assert _kinds(engine) == [("b", ViolationKind.SPECIAL)]
    assert presenter.kinds_for("g-b") == {ViolationKind.SPECIAL}

    b = make_field("b", value="x", same_as="a")
    assert engine.run_pass(FieldSet([a, b])) is True
    assert engine.violations == []


def test_required_and_special_are_independent(engine, presenter, make_field):
    a = make_field("a", value="x")
    b = make_field("b", required=True, same_as="a")

    assert engine.run_pass(FieldSet([a, b])) is False
    assert _kinds(engine) == [("b", ViolationKind.REQUIRED), ("b", ViolationKind.SPECIAL)]
    assert presenter.kinds_for("g-b") == {ViolationKind.REQUIRED, ViolationKind.SPECIAL}


def test_value_and_special_can_both_fire(engine, make_field):
    a = make_field("a", value="12")
    b = make_field("b", type="number", value="3", max="2", same_as="a")

    engine.run_pass(FieldSet([a, b]))
    assert _kinds(engine) == [("b", ViolationKind.VALUE), ("b", ViolationKind.SPECIAL)]


def test_required_checkbox_is_flagged_when_checked(engine, make_field):
    # Checkbox emptiness is its checked state
    assert engine.run_pass(FieldSet([make_field("terms", type="checkbox", required=True, checked=True)])) is False
    assert _kinds(engine) == [("terms", ViolationKind.REQUIRED)]

    assert engine.run_pass(FieldSet([make_field("terms", type="checkbox", required=True)])) is True


def test_required_radio_group_reports_every_button(engine, presenter):
    row = Group(id="row-plan")
    basic = FieldDescriptor(id="basic", type="radio", name="plan", required=True, group=row)
    pro = FieldDescriptor(id="pro", type="radio", name="plan", required=True, group=row)

    assert engine.run_pass(FieldSet([basic, pro])) is False
    assert _kinds(engine) == [("basic", ViolationKind.REQUIRED), ("pro", ViolationKind.REQUIRED)]
    assert presenter.signals == [("row-plan", ViolationKind.REQUIRED), ("row-plan", ViolationKind.REQUIRED)]

    pro = FieldDescriptor(id="pro", type="radio", name="plan", required=True, checked=True, group=row)
    assert engine.run_pass(FieldSet([basic, pro])) is True


@pytest.mark.parametrize("field_type", ["submit", "image", "hidden", "reset"])
def test_control_types_never_participate(engine, make_field, field_type):
    field = make_field("f", type=field_type, required=True, same_as="nowhere")
    assert engine.run_pass(FieldSet([field])) is True
    assert engine.violations == []


def test_disabled_fields_never_participate(engine, make_field):
    field = make_field("f", type="number", value="x", required=True, disabled=True)
    assert engine.run_pass(FieldSet([field])) is True


def test_field_without_group_is_skipped(engine, presenter):
    orphan = FieldDescriptor(id="orphan", required=True)

    assert engine.run_pass(FieldSet([orphan])) is True
    assert engine.violations == []
    assert presenter.error_groups == {}


def test_violations_keep_emission_order_without_dedup(engine, make_field):
    shared = Group(id="row")
    fields = FieldSet([
        make_field("first", required=True, group=shared),
        make_field("second", type="email", value="NOPE", group=shared),
        make_field("third", required=True, group=shared),
    ])

    engine.run_pass(fields)

    assert engine.violations == [
        Violation(field_id="first", group_id="row", kind=ViolationKind.REQUIRED),
        Violation(field_id="second", group_id="row", kind=ViolationKind.VALUE),
        Violation(field_id="third", group_id="row", kind=ViolationKind.REQUIRED),
    ]
    assert engine.report().summary == {"required": 2, "value": 1, "special": 0}


def test_pass_resets_previous_state(engine, presenter, make_field):
    assert engine.run_pass(FieldSet([make_field("name", required=True)])) is False
    assert presenter.is_marked("g-name")

    assert engine.run_pass(FieldSet([make_field("name", required=True, value="Ann")])) is True
    assert engine.violations == []
    assert presenter.error_groups == {}
    assert presenter.shown == {}


def test_pass_is_idempotent(engine, presenter, make_field):
    fields = FieldSet([
        make_field("a", value="x"),
        make_field("b", value="y", same_as="a", required=True),
        make_field("n", type="number", value="9", max="5"),
    ])
    engine.add_validation(lambda: True)

    first = engine.run_pass(fields)
    first_violations = list(engine.violations)
    first_signals = list(presenter.signals)

    second = engine.run_pass(fields)

    assert first == second is False
    assert engine.violations == first_violations
    assert presenter.signals == first_signals


def test_candidates_limit_validation_but_not_lookups(engine, make_field):
    a = make_field("a", value="x")
    b = make_field("b", value="x", same_as="a")
    c = make_field("c", required=True)

    assert engine.run_pass(FieldSet([a, b, c]), candidates=[b]) is True
    assert engine.run_pass(FieldSet([a, b, c]), candidates=[b, c]) is False


def test_check_valid_evaluates_single_field(engine, presenter, make_field):
    engine.valid = True
    engine.check_valid(make_field("zip", pattern=r"\d{5}", value="1234"))

    assert engine.valid is False
    assert _kinds(engine) == [("zip", ViolationKind.VALUE)]
    assert presenter.is_marked("g-zip")


def test_check_valid_uses_given_field_set_for_same_as(engine, make_field):
    a = make_field("a", value="x")
    b = make_field("b", value="x", same_as="a")
    engine.valid = True

    engine.check_valid(b, FieldSet([a, b]))
    assert engine.valid is True


# ── Custom validations ──


def test_custom_validations_run_newest_first_without_short_circuit(engine):
    calls = []

    def p1():
        calls.append("p1")
        return True

    def p2():
        calls.append("p2")
        return False

    engine.add_validation(p1)
    engine.add_validation(p2)

    assert engine.run_pass(FieldSet()) is False
    assert calls == ["p2", "p1"]
    assert engine.custom_failures == 1


def test_custom_validation_failure_fails_an_otherwise_valid_form(engine, make_field):
    engine.add_validation(lambda: False)
    assert engine.run_pass(FieldSet([make_field("name", value="Ann")])) is False
    assert engine.violations == []


def test_custom_validations_run_even_after_field_failures(engine, make_field):
    calls = []
    engine.add_validation(lambda: calls.append("ran") or True)

    assert engine.run_pass(FieldSet([make_field("name", required=True)])) is False
    assert calls == ["ran"]


def test_registry_persists_and_allows_duplicates(engine):
    calls = []

    def counted():
        calls.append(1)
        return True

    engine.add_validation(counted)
    engine.add_validation(counted)

    engine.run_pass(FieldSet())
    engine.run_pass(FieldSet())

    assert len(calls) == 4
    assert len(engine.custom_validations) == 2


def test_raising_custom_validation_counts_as_failure(engine):
    calls = []

    def ok():
        calls.append("ok")
        return True

    def broken():
        raise RuntimeError("lookup failed")

    engine.add_validation(ok)
    engine.add_validation(broken)

    assert engine.run_pass(FieldSet()) is False
    assert calls == ["ok"]
    assert engine.custom_failures == 1


def test_pass_cannot_start_inside_another_pass(engine):
    seen = []

    def reentrant():
        try:
            engine.run_pass(FieldSet())
        except PassInProgressError as e:
            seen.append(e)
        assert engine.state == PassState.EVALUATING_CUSTOM
        return True

    engine.add_validation(reentrant)

    assert engine.run_pass(FieldSet()) is True
    assert len(seen) == 1
    assert engine.state == PassState.DONE


def test_custom_validations_can_be_given_at_construction(presenter):
    engine = ValidationEngine(presenter, custom_validations=[lambda: True])
    assert engine.run_pass(FieldSet()) is True
    assert engine.report().valid is True


def test_overlong_number_value_is_a_value_violation_not_a_crash(engine, make_field):
    ran = []
    engine.add_validation(lambda: ran.append(True) or True)

    fields = FieldSet([make_field("n", type="number", value="9" * 5000)])

    assert engine.run_pass(fields) is False
    assert _kinds(engine) == [("n", ViolationKind.VALUE)]
    assert ran == [True]
    assert engine.state == PassState.DONE
