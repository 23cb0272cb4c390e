"""
JsValidation configuration.

Load with `set_config(Config.from_file("config/jsvalidation.py"))`, or pass
`--config config/jsvalidation.py` to the CLI. Environment variables prefixed
with `JSVALIDATION_` override these values.
"""

config = {
    # Default view used to render the validation script:
    # "jsvalidation::bootstrap", "jsvalidation::bootstrap4" or "jsvalidation::bootstrap5"
    "view": "jsvalidation::bootstrap",

    # CSS selector of the forms to validate
    "form_selector": "form",

    # Scroll to the first invalid element on submit
    "focus_on_error": True,

    # Scroll animation duration in milliseconds
    "duration_animate": 1000,

    # Public path of the client plugin script
    "js_validation_path": "vendor/jsvalidation/js/jsvalidation.min.js",

    # Disable AJAX validation of rules the browser cannot check
    "disable_remote_validation": False,

    # Request field carrying the attribute under remote validation
    "remote_validation_field": "_jsvalidation",

    # HTML-escape generated messages
    "escape": False,

    # Elements the client plugin ignores
    "ignore": ":hidden, [contenteditable='true']",

    # Template directories searched before the bundled views
    "view_paths": ["resources/views/vendor/jsvalidation"],
}
