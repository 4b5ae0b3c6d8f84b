"""
Unit tests for plan normalization, the required-field gate and argument building.
"""
import pytest

from modules.validation import PlanDefinitionError, UnknownCapabilityError, ValidationResult, ValidationStep
from modules.validation.core.plan import (
    build_method_args,
    normalize_step,
    normalize_validation_plan,
    should_skip_step,
)
from shared.utils.config import settings


# ==========================================================================
# Normalization
# ==========================================================================

class TestNormalizeStep:

    def test_defaults_are_filled_in(self, registry):
        step = normalize_step({'field': 'uid', 'method': 'accept'}, 0, registry)

        assert step.field == 'uid'
        assert step.fields == ('uid',)
        assert step.args == ()
        assert step.required is False
        assert step.required_msg == "This field is required"
        assert step.capability is registry['accept']
        assert step.is_composite is False

    def test_explicit_values_are_kept(self, registry):
        step = normalize_step({
            'field': 'dates',
            'fields': ['startyear', 'endyear'],
            'method': 'accept_all',
            'args': [1, 2],
            'required': True,
            'required_msg': 'These fields are required',
        }, 3, registry)

        assert step.fields == ('startyear', 'endyear')
        assert step.args == (1, 2)
        assert step.required is True
        assert step.required_msg == 'These fields are required'
        assert step.is_composite is True

    def test_default_message_follows_settings(self, registry, monkeypatch):
        monkeypatch.setattr(settings, 'VALIDATION_REQUIRED_MESSAGE', 'Please fill this in')

        step = normalize_step({'field': 'uid', 'method': 'accept'}, 0, registry)
        assert step.required_msg == 'Please fill this in'

    def test_step_has_no_built_in_message(self):
        with pytest.raises(TypeError):
            ValidationStep(field='uid', fields=('uid',), method='accept', capability=len)

    def test_camel_case_required_message_is_accepted(self, registry):
        step = normalize_step({'field': 'uid', 'method': 'accept', 'requiredMsg': 'Need it'}, 0, registry)
        assert step.required_msg == 'Need it'

    @pytest.mark.parametrize("raw_step", [
        {'method': 'accept'},
        {'field': 'uid'},
        {'field': None, 'method': 'accept'},
    ])
    def test_missing_field_or_method(self, registry, raw_step):
        with pytest.raises(PlanDefinitionError) as exc_info:
            normalize_step(raw_step, 4, registry)
        assert exc_info.value.step_index == 4

    @pytest.mark.parametrize("raw_step", [
        {'field': '', 'method': 'accept'},
        {'field': 7, 'method': 'accept'},
        {'field': 'uid', 'method': ''},
        {'field': 'uid', 'method': 'accept', 'fields': 'uid'},
        {'field': 'uid', 'method': 'accept', 'fields': []},
        {'field': 'uid', 'method': 'accept', 'fields': ['uid', '']},
        {'field': 'uid', 'method': 'accept', 'args': 'abc'},
        {'field': 'uid', 'method': 'accept', 'args': {'min': 1}},
        {'field': 'uid', 'method': 'accept', 'required': 'yes'},
        {'field': 'uid', 'method': 'accept', 'required': 1},
        {'field': 'uid', 'method': 'accept', 'required_msg': 5},
    ])
    def test_wrong_types_are_rejected(self, registry, raw_step):
        with pytest.raises(PlanDefinitionError):
            normalize_step(raw_step, 0, registry)

    def test_step_must_be_a_mapping(self, registry):
        with pytest.raises(PlanDefinitionError):
            normalize_step(['uid', 'accept'], 0, registry)

    def test_unknown_capability(self, registry):
        with pytest.raises(UnknownCapabilityError) as exc_info:
            normalize_step({'field': 'uid', 'method': 'no_such_check'}, 2, registry)

        assert isinstance(exc_info.value, PlanDefinitionError)
        assert exc_info.value.method == 'no_such_check'
        assert exc_info.value.step_index == 2


class TestNormalizeValidationPlan:

    def test_steps_keep_declaration_order(self, registry):
        plan = normalize_validation_plan([
            {'field': 'b', 'method': 'accept'},
            {'field': 'a', 'method': 'reject'},
        ], registry)
        assert [step.field for step in plan] == ['b', 'a']

    def test_plan_must_be_a_list(self, registry):
        with pytest.raises(PlanDefinitionError):
            normalize_validation_plan({'field': 'uid', 'method': 'accept'}, registry)

    def test_one_bad_step_rejects_the_plan(self, registry):
        with pytest.raises(PlanDefinitionError) as exc_info:
            normalize_validation_plan([
                {'field': 'uid', 'method': 'accept'},
                {'field': 'gid', 'method': 'accept', 'args': 'oops'},
            ], registry)
        assert exc_info.value.step_index == 1

    def test_empty_plan(self):
        assert normalize_validation_plan([], {}) == []

    def test_required_capability_must_be_registered(self):
        registry = {'accept': lambda result, value, field_key: None}
        with pytest.raises(UnknownCapabilityError) as exc_info:
            normalize_validation_plan([{'field': 'uid', 'method': 'accept'}], registry)
        assert exc_info.value.method == 'validate_required_field'

    def test_global_registry_is_the_default(self):
        plan = normalize_validation_plan([{'field': 'uid', 'method': 'validate_integer'}])
        assert plan[0].capability.__name__ == 'validate_integer'


# ==========================================================================
# Required-field gate
# ==========================================================================

class TestShouldSkipStep:

    def _step(self, registry, **overrides):
        raw_step = {'field': 'uid', 'method': 'accept', **overrides}
        return normalize_step(raw_step, 0, registry)

    def test_required_missing_input_skips(self, registry):
        result = ValidationResult()
        step = self._step(registry, required=True)

        assert should_skip_step(step, {}, result, registry) is True
        assert result.get_field_errors('uid') == ["This field is required"]
        assert result.has_field_value('uid') is False

    def test_required_message_comes_from_the_step(self, registry):
        result = ValidationResult()
        step = self._step(registry, required=True, required_msg='Need a uid')

        should_skip_step(step, {'uid': '   '}, result, registry)
        assert result.get_field_errors('uid') == ['Need a uid']

    def test_optional_missing_input_stores_none(self, registry):
        result = ValidationResult()
        step = self._step(registry)

        assert should_skip_step(step, {}, result, registry) is False
        assert result.has_field_value('uid') is True
        assert result.get_value('uid') is None
        assert result.has_errors() is False

    @pytest.mark.parametrize("value", ["500", 0, "0", ["x"], True])
    def test_present_values_are_stored(self, registry, value):
        result = ValidationResult()
        step = self._step(registry, required=True)

        assert should_skip_step(step, {'uid': value}, result, registry) is False
        assert result.get_value('uid') == value

    @pytest.mark.parametrize("value", [None, "", "  \t", [], {}, False])
    def test_empty_values_count_as_missing(self, registry, value):
        result = ValidationResult()
        step = self._step(registry, required=True)

        assert should_skip_step(step, {'uid': value}, result, registry) is True

    def test_composite_checks_every_input(self, registry):
        result = ValidationResult()
        step = self._step(
            registry,
            field='dates',
            fields=['startyear', 'startmonth', 'endyear'],
            method='accept_all',
            required=True,
            required_msg='These fields are required',
        )

        skipped = should_skip_step(step, {'startmonth': '3'}, result, registry)

        assert skipped is True
        assert result.get_all_errors() == {
            'startyear': ['These fields are required'],
            'endyear': ['These fields are required'],
        }
        assert result.get_value('startmonth') == '3'


# ==========================================================================
# Argument builder
# ==========================================================================

class TestBuildMethodArgs:

    def test_single_input(self, registry):
        result = ValidationResult()
        step = normalize_step({'field': 'uid', 'method': 'accept', 'args': [1, 20000]}, 0, registry)

        args = build_method_args(step, {'uid': '500'}, result)
        assert args == [result, '500', 'uid', 1, 20000]
        assert args[0] is result

    def test_composite_values_follow_fields_order(self, registry):
        result = ValidationResult()
        step = normalize_step({
            'field': 'dates',
            'fields': ['startyear', 'endyear'],
            'method': 'accept_all',
        }, 0, registry)

        args = build_method_args(step, {'endyear': '2025', 'startyear': '2024'}, result)
        assert args == [result, '2024', '2025', 'dates']

    def test_missing_optional_input_is_passed_as_none(self, registry):
        result = ValidationResult()
        step = normalize_step({'field': 'comments', 'method': 'accept'}, 0, registry)

        assert build_method_args(step, {}, result) == [result, None, 'comments']
