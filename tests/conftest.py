"""
Shared test fixtures for the validation engine test suite.
"""
import pytest

from modules.validation import BaseValidator
from modules.validation.capabilities.required_fields import validate_required_field


# ==========================================================================
# Recording registry
# ==========================================================================

class RecordingRegistry(dict):
    """Capability registry that records every dispatched call."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self["validate_required_field"] = validate_required_field

    def add(self, name, func):
        def recorder(result, *args):
            self.calls.append((name, args))
            return func(result, *args)

        self[name] = recorder
        return recorder

    def called(self, name):
        return [args for called_name, args in self.calls if called_name == name]


@pytest.fixture
def registry():
    reg = RecordingRegistry()

    def accept(result, value, field_key, *args):
        result.set_value(field_key, value)

    def reject(result, value, field_key, message="Rejected."):
        result.add_error(field_key, message)

    def accept_all(result, *args):
        *values, field_key = args
        result.set_value(field_key, list(values))

    reg.add("accept", accept)
    reg.add("reject", reject)
    reg.add("accept_all", accept_all)
    return reg


# ==========================================================================
# Plan validator
# ==========================================================================

class PlanValidator(BaseValidator):
    """Validator running whatever plan it was constructed with."""

    def __init__(self, plan, registry=None):
        super().__init__(registry)
        self.plan = plan

    def get_validation_plan(self, data, context):
        return self.plan


@pytest.fixture
def make_validator():
    def factory(plan, registry=None):
        return PlanValidator(plan, registry)

    return factory


# ==========================================================================
# Form data
# ==========================================================================

@pytest.fixture
def feedback_context():
    return {
        "support": {"jrivera": "J. Rivera", "mchen": "M. Chen"},
        "operator": {"op1": "Operator One", "op2": "Operator Two"},
        "instruments": {"spex": "SpeX", "ishell": "iSHELL", "moris": "MORIS"},
    }


@pytest.fixture
def feedback_form():
    return {
        "respondent": "Alex Doe",
        "email": "alex.doe@example.org",
        "startyear": "2024",
        "startmonth": "3",
        "startday": "10",
        "endyear": "2024",
        "endmonth": "3",
        "endday": "12",
        "support_staff": ["jrivera"],
        "operator_staff": ["op2"],
        "instruments": ["spex", "ishell"],
        "location": "1",
        "experience": "5",
        "scientificstaff": "4",
        "operators": "0",
        "daycrew": "3",
        "technical": "Guider was stable all night.",
        "personnel": "",
        "comments": "Great run.",
    }


@pytest.fixture
def guest_form():
    return {
        "command": "addguest",
        "username": "guest01",
        "acctname": "Visiting observer",
        "uid": "500",
        "gid": "500",
        "shell": "/bin/bash",
        "passwd": "s3cretpw",
        "accttype": "3",
    }
