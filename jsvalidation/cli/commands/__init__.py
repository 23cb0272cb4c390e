"""JsValidation CLI commands."""
