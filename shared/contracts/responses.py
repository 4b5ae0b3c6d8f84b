"""
Response schemas for validation results handed back to form controllers.
"""

from typing import Any, Dict, List, Union
from pydantic import BaseModel, Field


class ValidationErrorResponse(BaseModel):
    """Response schema for a failed validation pass."""

    success: bool = Field(default=False)
    error_type: str = Field(default="validation_error", description="Type of error")
    error_message: str = Field(default="Validation errors occurred.", description="Human-readable error message")
    errors: Dict[str, Union[str, List[str]]] = Field(
        default_factory=dict,
        description="Field (or composite prefix) to message(s)"
    )
    input: Dict[str, Any] = Field(
        default_factory=dict,
        description="Submitted, unvalidated input echoed back for form re-rendering"
    )

    def field_messages(self, field: str) -> List[str]:
        """Get the messages for one field as a list."""
        messages = self.errors.get(field, [])
        if isinstance(messages, str):
            return [messages]
        return list(messages)


class ValidationSuccessResponse(BaseModel):
    """Response schema for a successful validation pass."""

    success: bool = Field(default=True)
    data: Dict[str, Any] = Field(default_factory=dict, description="Validated, controller-ready values")
