"""UI hosts for the modal editor."""
