"""Unit tests for the checks applied to inputs and outputs."""

from __future__ import annotations

import decimal
from typing import Any

import pytest
from sample_actors import (
    LambdaDefaultWithReference,
    Order,
    PayWithProvider,
    ReduceOrderAmount,
    SetNameToDowncase,
)

from service_actor import Actor, ArgumentError, Attribute, DefinitionError, Origin
from service_actor.checks import CheckTarget, DefaultCheck, NilCheck


class NonZero:
    """A type-like object accepting any truthy number."""

    def __instancecheck__(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and value != 0

    def __str__(self) -> str:
        return "NonZero"


# Default


def test_default_applies_only_when_key_is_absent() -> None:
    class AddGreeting(Actor):
        inputs = {"name": {"default": "world"}}
        outputs = {"greeting": {}}

        def execute(self) -> None:
            self.greeting = None if self.name is None else f"Hello, {self.name}!"

    assert AddGreeting.call()["greeting"] == "Hello, world!"
    assert AddGreeting.call(name="Jim")["greeting"] == "Hello, Jim!"
    assert AddGreeting.call(name=None)["greeting"] is None


def test_literal_defaults_are_not_shared_between_calls() -> None:
    class Collect(Actor):
        inputs = {"items": {"type": list, "default": []}, "options": {"default": {"seen": []}}}

        def execute(self) -> None:
            self.items.append(1)
            self.options["seen"].append(1)

    first = Collect.call()
    second = Collect.call()

    assert first["items"] == [1]
    assert second["items"] == [1]
    assert second["options"] == {"seen": [1]}
    assert Collect.inputs["items"].default == []


def test_lazy_defaults_receive_nothing_or_the_actor() -> None:
    calls: list[str] = []

    class LazyDefaults(Actor):
        inputs = {
            "name": {"default": lambda: calls.append("name") or "Jim"},
            "label": {"default": lambda actor: f"<{actor.name}>"},
        }

    result = LazyDefaults.call()
    assert result.to_dict() == {"name": "Jim", "label": "<Jim>"}
    assert calls == ["name"]

    LazyDefaults.call(name="Tom")
    assert calls == ["name"]


def test_lazy_default_can_reference_other_inputs() -> None:
    result = LambdaDefaultWithReference.call(old_project_id=1)

    assert result["properties"] == {"project_id": "1.0"}


def test_output_default_applies_after_execute_when_unset() -> None:
    class SetDisplay(Actor):
        inputs = {"set_it": {"type": bool}}
        outputs = {"display": {"type": str, "default": lambda: "default"}}

        def execute(self) -> None:
            if self.set_it:
                self.display = "explicit"

    assert SetDisplay.call(set_it=False)["display"] == "default"
    assert SetDisplay.call(set_it=True)["display"] == "explicit"


def test_missing_input_without_default_raises() -> None:
    class UseRequiredInput(Actor):
        inputs = {"name": {}}

    with pytest.raises(ArgumentError, match='The "name" input on "UseRequiredInput" is missing'):
        UseRequiredInput.call()


def test_missing_input_is_tolerated_when_nil_is_allowed() -> None:
    class OptionalInput(Actor):
        inputs = {"name": {"type": str, "allow_nil": True}}

    result = OptionalInput.call()
    assert result.is_success()
    assert "name" not in result


def test_advanced_default_without_value_reports_custom_message() -> None:
    class NeedsFactor(Actor):
        inputs = {"factor": {"default": {"is": None, "message": "Factor is required"}}}

    with pytest.raises(ArgumentError, match="^Factor is required$"):
        NeedsFactor.call()
    assert NeedsFactor.call(factor=2)["factor"] == 2


def test_default_check_leaves_present_none_alone() -> None:
    class Holder(Actor):
        inputs = {"name": {"default": "world"}}

    actor = Holder({"name": None})
    target = CheckTarget(
        origin=Origin.INPUT, key="name", actor=actor, options=Holder.inputs["name"]
    )

    assert DefaultCheck().check(target) == []
    assert actor.result["name"] is None


# Type


def test_type_accepts_tuples_and_names_resolved_at_check_time() -> None:
    order = Order(amount=10)

    ReduceOrderAmount.call(order=order, amount=2.5)

    assert order.amount == 7.5


def test_type_rejects_other_classes() -> None:
    with pytest.raises(ArgumentError) as excinfo:
        ReduceOrderAmount.call(order="order", amount=1)

    assert str(excinfo.value) == (
        'The "order" input on "ReduceOrderAmount" must be of type "Order" but was "str"'
    )


def test_type_lists_every_expected_type() -> None:
    with pytest.raises(ArgumentError, match='must be of type "int, float" but was "str"'):
        ReduceOrderAmount.call(order=Order(amount=1), amount="1")


def test_type_resolves_dotted_names_and_generics() -> None:
    class Price(Actor):
        inputs = {
            "amount": {"type": "decimal.Decimal"},
            "tags": {"type": list[str], "default": lambda: []},
        }

    assert Price.call(amount=decimal.Decimal("1.5"), tags=["a"])["tags"] == ["a"]
    with pytest.raises(ArgumentError, match='"tags" input on "Price" must be of type "list"'):
        Price.call(amount=decimal.Decimal("1"), tags=("a",))


def test_type_accepts_objects_implementing_instancecheck() -> None:
    class Divide(Actor):
        inputs = {"dividend": {"type": int}, "divisor": {"type": NonZero()}}
        outputs = {"outcome": {"type": float}}

        def execute(self) -> None:
            self.outcome = self.dividend / self.divisor

    assert Divide.call(dividend=42, divisor=6)["outcome"] == 7.0
    with pytest.raises(ArgumentError, match='must be of type "NonZero" but was "int"'):
        Divide.call(dividend=42, divisor=0)


def test_type_with_custom_message() -> None:
    class Toggle(Actor):
        inputs = {
            "enabled": {
                "type": {
                    "is": bool,
                    "message": lambda input_key, given_type, **_: f"{input_key}: {given_type}?",
                }
            }
        }

    with pytest.raises(ArgumentError, match=r"^enabled: str\?$"):
        Toggle.call(enabled="yes")


def test_unknown_type_name_is_a_definition_error() -> None:
    class Broken(Actor):
        inputs = {"thing": {"type": "DoesNotExist"}}

    with pytest.raises(DefinitionError, match="DoesNotExist"):
        Broken.call(thing=1)


# Nil


def test_typed_input_disallows_none() -> None:
    with pytest.raises(
        ArgumentError, match='The "name" input on "SetNameToDowncase" does not allow None values'
    ):
        SetNameToDowncase.call(name=None)


def test_none_allowed_without_type_or_with_none_default() -> None:
    class Loose(Actor):
        inputs = {
            "anything": {},
            "maybe": {"type": str, "default": None},
        }

    result = Loose.call(anything=None)
    assert result.to_dict() == {"anything": None, "maybe": None}


def test_explicit_allow_nil_false_wins_over_none_default() -> None:
    class Strict(Actor):
        inputs = {"name": {"default": None, "allow_nil": False}}

    with pytest.raises(ArgumentError, match="does not allow None"):
        Strict.call()


def test_allow_nil_with_custom_message_and_required_alias() -> None:
    class CreateUser(Actor):
        inputs = {"phone": {"allow_nil": {"is": False, "message": "Phone must be present"}}}
        outputs = {"user": {"required": True}}

        def execute(self) -> None:
            self.user = None

    with pytest.raises(ArgumentError, match="^Phone must be present$"):
        CreateUser.call(phone=None)
    with pytest.raises(ArgumentError, match='The "user" output on "CreateUser" does not allow'):
        CreateUser.call(phone="555")


def test_unset_typed_output() -> None:
    class Optional(Actor):
        outputs = {"value": {"type": str, "allow_nil": True}}

    class Mandatory(Actor):
        outputs = {"value": {"type": str}}

    assert Optional.result().is_success()
    with pytest.raises(ArgumentError, match='"value" output on "Mandatory"'):
        Mandatory.call()


def test_nil_check_directly() -> None:
    class Holder(Actor):
        inputs = {"name": Attribute(type=str)}

    target = CheckTarget(
        origin=Origin.INPUT, key="name", actor=Holder({}), options=Holder.inputs["name"]
    )
    assert NilCheck().check(target) == [
        'The "name" input on "Holder" does not allow None values'
    ]


# Must


class Paginate(Actor):
    inputs = {
        "per_page": {
            "must": {
                "be_in_range": {
                    "is": lambda per_page: 3 <= per_page <= 9,
                    "message": lambda value, **_: f"Wrong range (3-9): {value}",
                },
            },
        },
        "page": {"type": int, "default": 1, "must": {"be_positive": lambda page: page > 0}},
    }


def test_must_accepts_passing_values() -> None:
    assert Paginate.call(per_page=5)["page"] == 1


def test_must_reports_default_and_custom_messages() -> None:
    with pytest.raises(ArgumentError, match="^Wrong range \\(3-9\\): 10$"):
        Paginate.call(per_page=10)

    with pytest.raises(ArgumentError) as excinfo:
        Paginate.call(per_page=5, page=0)
    assert str(excinfo.value) == 'The "page" input on "Paginate" must "be_positive" but was 0'


def test_must_contains_errors_raised_by_predicates() -> None:
    with pytest.raises(ArgumentError) as excinfo:
        Paginate.call(per_page="6")

    message = str(excinfo.value)
    assert message.startswith(
        'The "per_page" input on "Paginate" has an error in the code inside "be_in_range": '
        "[TypeError]"
    )


def test_type_runs_before_must() -> None:
    class TypedPaginate(Actor):
        inputs = {
            "per_page": {
                "must": {"be_in_range": lambda per_page: 3 <= per_page <= 9},
                "type": int,
            },
        }

    with pytest.raises(ArgumentError) as excinfo:
        TypedPaginate.call(per_page="6")

    assert str(excinfo.value) == (
        'The "per_page" input on "TypedPaginate" must be of type "int" but was "str"'
    )


def test_must_is_skipped_for_allowed_none() -> None:
    class Weekdays(Actor):
        inputs = {
            "weekdays": {
                "type": list,
                "allow_nil": True,
                "default": [0, 1, 2, 3, 4],
                "must": {"be_valid": lambda days: all(0 <= day <= 6 for day in days)},
            },
        }

    assert Weekdays.call()["weekdays"] == [0, 1, 2, 3, 4]
    assert Weekdays.call(weekdays=None)["weekdays"] is None
    with pytest.raises(ArgumentError, match='must "be_valid"'):
        Weekdays.call(weekdays=[7])


# Inclusion


def test_inclusion_accepts_allowed_values_and_defaults() -> None:
    assert PayWithProvider.call(provider="PayPal")["message"] == "Money transferred to PayPal!"
    assert PayWithProvider.call()["message"] == "Money transferred to Stripe!"


def test_inclusion_rejects_other_values() -> None:
    with pytest.raises(ArgumentError) as excinfo:
        PayWithProvider.call(provider="Paypal")

    assert str(excinfo.value) == (
        "The \"provider\" input must be included in ['MANGOPAY', 'PayPal', 'Stripe'] "
        "on \"PayWithProvider\" instead of 'Paypal'"
    )


def test_inclusion_with_in_alias_and_custom_message() -> None:
    class Convert(Actor):
        inputs = {
            "currency": {
                "in": {
                    "in": {"EUR", "USD"},
                    "message": lambda value, **_: f'Currency "{value}" is not supported',
                },
            },
        }

    assert Convert.call(currency="EUR")["currency"] == "EUR"
    with pytest.raises(ArgumentError, match='^Currency "GBP" is not supported$'):
        Convert.call(currency="GBP")
    with pytest.raises(ArgumentError, match="is not supported"):
        Convert.call(currency=["EUR"])


def test_inclusion_with_allow_nil_and_none_default() -> None:
    class PickName(Actor):
        inputs = {
            "name": {"type": str, "inclusion": ["abc", "def"], "allow_nil": True, "default": None},
        }

    assert PickName.call()["name"] is None
    assert PickName.call(name=None)["name"] is None
    assert PickName.call(name="abc")["name"] == "abc"
    with pytest.raises(ArgumentError, match="must be included in"):
        PickName.call(name="xyz")


# Aggregation


def test_errors_of_all_inputs_are_reported_together() -> None:
    class TwoInputs(Actor):
        inputs = {"name": {"type": str}, "age": {"type": int}}

    with pytest.raises(ArgumentError) as excinfo:
        TwoInputs.call(name=1, age="1")

    message = str(excinfo.value)
    assert '"name" input on "TwoInputs"' in message
    assert '"age" input on "TwoInputs"' in message
    assert message.count("; ") == 1


def test_only_first_error_reported_when_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SERVICE_ACTOR_ARGUMENT_ERRORS", "first")

    class TwoInputs(Actor):
        inputs = {"name": {"type": str}, "age": {"type": int}}

    with pytest.raises(ArgumentError) as excinfo:
        TwoInputs.call(name=1, age="1")

    assert str(excinfo.value) == (
        'The "name" input on "TwoInputs" must be of type "str" but was "int"'
    )
