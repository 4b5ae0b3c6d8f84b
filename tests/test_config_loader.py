"""
Tests for the YAML plan configuration loader.
"""
import pytest
import yaml

from modules.validation import ValidationException
from modules.validation.core.config_loader import PlanConfigLoader, load_plan_config
from modules.validation.forms import ConfiguredFormValidator


PLANS_YAML = """
global:
  required_msg: "Please fill this in"

forms:
  contact:
    plan:
      - field: email
        method: validate_email_field
        args: [70]
        required: true
      - field: topic
        method: validate_string_in_set
        args: ["$context.topics"]
        required: true
        required_msg: "Pick a topic"
"""


@pytest.fixture
def plans_file(tmp_path):
    path = tmp_path / "plans.yaml"
    path.write_text(PLANS_YAML, encoding="utf-8")
    return path


class TestPlanConfigLoader:

    def test_list_forms(self, plans_file):
        assert PlanConfigLoader(str(plans_file)).list_forms() == ['contact']

    def test_global_message_is_a_default(self, plans_file):
        plan = PlanConfigLoader(str(plans_file)).get_form_plan('contact')

        assert plan[0]['required_msg'] == "Please fill this in"
        assert plan[1]['required_msg'] == "Pick a topic"

    def test_unknown_form(self, plans_file):
        assert PlanConfigLoader(str(plans_file)).get_form_plan('nope') == []

    def test_missing_file_uses_empty_config(self, tmp_path):
        loader = PlanConfigLoader(str(tmp_path / "absent.yaml"))

        assert loader.load() == {'global': {}, 'forms': {}}
        assert loader.list_forms() == []

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("forms: [unclosed", encoding="utf-8")

        with pytest.raises(yaml.YAMLError):
            PlanConfigLoader(str(path)).load()

    def test_reload_picks_up_changes(self, plans_file):
        loader = PlanConfigLoader(str(plans_file))
        assert loader.list_forms() == ['contact']

        plans_file.write_text("forms:\n  other:\n    plan: []\n", encoding="utf-8")
        loader.reload()

        assert loader.list_forms() == ['other']

    def test_load_plan_config(self, plans_file):
        config = load_plan_config(str(plans_file))
        assert config['global'] == {'required_msg': "Please fill this in"}

    def test_bundled_plans_file(self):
        forms = PlanConfigLoader().list_forms()
        assert {'update_application_date', 'obs_data_restoration_request',
                'process_feedback_reminders'} <= set(forms)


class TestConfiguredPlans:

    def test_context_is_resolved(self, plans_file):
        validator = ConfiguredFormValidator('contact', PlanConfigLoader(str(plans_file)))

        values = validator.validate_data(
            {'email': 'alex@example.org', 'topic': 'billing'},
            {'topics': ['billing', 'support']}
        )
        assert values == {'email': 'alex@example.org', 'topic': 'billing'}

    def test_configured_messages(self, plans_file):
        validator = ConfiguredFormValidator('contact', PlanConfigLoader(str(plans_file)))

        with pytest.raises(ValidationException) as exc_info:
            validator.validate_data({}, {'topics': ['billing']})

        assert exc_info.value.errors == {
            'email': ["Please fill this in"],
            'topic': ["Pick a topic"],
        }

    def test_feedback_reminder_plan(self):
        validator = ConfiguredFormValidator('process_feedback_reminders')

        values = validator.validate_data({
            'semester': '2024A',
            'emails_send_type': '0',
            'interval': '2',
            'interval_unit': '1',
        })
        assert values == {'semester': '2024A', 'emails_send_type': 0, 'interval': 2, 'interval_unit': 1}
