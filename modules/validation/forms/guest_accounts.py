"""
Validator for the guest account management form.
"""

from typing import Any, Dict, List, Mapping, Sequence

from modules.validation.core.base import ValidationResult, ValidationStep
from modules.validation.engine import BaseValidator

COMMANDS = ['addguest', 'clearguest', 'createguest', 'extendguest', 'removeguest']
ACCOUNT_TYPES = list(range(0, 11))
MAX_ACCOUNT_ID = 20000


class GuestAccountValidator(BaseValidator):
    """
    Validates guest account commands.

    The plan depends on data['command']:
    - addguest (default): username, acctname, uid, gid, shell, passwd, accttype
    - extendguest: username, expiredays (unix timestamp)
    - removeguest: username, uid, accttype
    - clearguest / createguest: only the command itself

    The command is validated too and echoed back in the clean values.
    """

    def get_validation_plan(self, data: Mapping[str, Any], context: Mapping[str, Any]) -> List[Dict[str, Any]]:
        command = data.get('command') or 'addguest'

        command_step = {
            'field': 'command',
            'method': 'validate_string_in_set',
            'args': [COMMANDS],
            'required': True,
        }

        username = {
            'field': 'username',
            'method': 'validate_username',
            'args': [8],
            'required': True,
        }

        if command in ('clearguest', 'createguest'):
            return [command_step]

        if command == 'extendguest':
            return [
                command_step,
                username,
                {
                    'field': 'expiredays',
                    'method': 'validate_unix_timestamp',
                    'args': [1],
                    'required': True,
                },
            ]

        account_type = {
            'field': 'accttype',
            'method': 'validate_selection',
            'args': [ACCOUNT_TYPES],
            'required': True,
        }

        if command == 'removeguest':
            return [
                command_step,
                username,
                {
                    'field': 'uid',
                    'method': 'validate_number_in_range',
                    'args': [0, MAX_ACCOUNT_ID, 'Invalid uid.'],
                    'required': True,
                },
                account_type,
            ]

        return [
            command_step,
            username,
            {
                'field': 'acctname',
                'method': 'validate_name_field',
                'args': [50],
                'required': True,
            },
            {
                'field': 'uid',
                'method': 'validate_number_in_range',
                'args': [1, MAX_ACCOUNT_ID, 'Invalid uid.'],
                'required': True,
            },
            {
                'field': 'gid',
                'method': 'validate_number_in_range',
                'args': [1, MAX_ACCOUNT_ID, 'Invalid gid.'],
                'required': True,
            },
            {
                'field': 'shell',
                'method': 'validate_shell_field',
                'required': True,
            },
            {
                'field': 'passwd',
                'method': 'validate_name_field',
                'args': [50],
                'required': True,
            },
            account_type,
        ]

    def format_valid_data(self, plan: Sequence[ValidationStep], result: ValidationResult) -> Dict[str, Any]:
        formatted = super().format_valid_data(plan, result)
        if 'accttype' in formatted:
            # Single-choice selection: unwrap and return as int
            formatted['accttype'] = int(formatted['accttype'][0])
        return formatted
