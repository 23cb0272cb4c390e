"""Tests for the JavaScript validator factory."""

import jsvalidation
from jsvalidation.core.request import build_request
from jsvalidation.factory import JsValidatorFactory, format_implicit_attribute
from jsvalidation.javascript import FORM_REQUEST_RULE, JAVASCRIPT_VALIDATION_RULE, REMOTE_RULE, JavascriptValidator
from jsvalidation.remote import JsValidationFormRequest
from jsvalidation.validation import FormRequest, Validator


class StoreUserRequest(JsValidationFormRequest):
    def rules(self):
        return {"name": "required", "email": "required|email|unique:users"}


class RoleRequest(FormRequest):
    def rules(self):
        rules = {"name": "required"}
        if self.query.get("role") == "admin":
            rules["permissions"] = "required|array"
        return rules


class ContactRequest(FormRequest):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.js_validator = None

    def rules(self):
        return {"email": "required|email"}

    def messages(self):
        return {"email.required": "We need your :attribute."}

    def attributes(self):
        return {"email": "e-mail"}

    def with_js_validator(self, validator):
        self.js_validator = validator


class TestOptions:
    """Tests for factory options."""

    def test_defaults_from_config(self):
        factory = JsValidatorFactory()

        assert factory.options == {
            "disable_remote_validation": False,
            "view": "jsvalidation::bootstrap",
            "form_selector": "form",
            "ignore": ":hidden, [contenteditable='true']",
            "escape": False,
        }

    def test_explicit_options(self):
        factory = JsValidatorFactory({
            "disable_remote_validation": True,
            "view": "jsvalidation::bootstrap4",
            "form_selector": "#register",
            "ignore": None,
            "escape": True,
        })

        assert factory.options["disable_remote_validation"] is True
        assert factory.options["view"] == "jsvalidation::bootstrap4"
        assert factory.options["form_selector"] == "#register"
        assert factory.options["ignore"] is None
        assert factory.options["escape"] is True

    def test_config_overrides(self):
        from jsvalidation.core.config import get_config

        get_config().set("form_selector", "#configured")

        assert JsValidatorFactory().options["form_selector"] == "#configured"


class TestMake:
    """Tests for validators built from rules."""

    def test_make(self, factory):
        validator = factory.make({"email": "required|email"})

        data = validator.to_dict()

        assert isinstance(validator, JavascriptValidator)
        assert data["selector"] == "form"
        assert data["ignore"] == ":hidden, [contenteditable='true']"
        assert [entry[0] for entry in data["rules"]["email"][JAVASCRIPT_VALIDATION_RULE]] == ["Required", "Email"]

    def test_selector(self, factory):
        assert factory.make({}, selector="#register")["selector"] == "#register"

    def test_session_token_in_remote_rules(self, factory):
        rules = factory.make({"email": "unique:users"})["rules"]

        assert rules["email"][REMOTE_RULE][0][1] == ["email", "csrf-token", False]

    def test_encrypted_session_token(self, session, encrypter):
        factory = JsValidatorFactory(session=session, encrypter=encrypter)

        token = factory.make({"email": "unique:users"})["rules"]["email"][REMOTE_RULE][0][1][1]

        assert token != "csrf-token"
        assert encrypter.decrypt(token) == "csrf-token"

    def test_token_from_request_session(self, session):
        factory = JsValidatorFactory(request=build_request(session=session))

        assert factory.get_session_token() == "csrf-token"

    def test_no_session_token(self):
        assert JsValidatorFactory().get_session_token() is None

    def test_remote_disabled(self, session):
        factory = JsValidatorFactory({"disable_remote_validation": True}, session=session)

        rules = factory.make({"email": "required|unique:users"})["rules"]

        assert list(rules["email"]) == [JAVASCRIPT_VALIDATION_RULE]

    def test_wildcard_rules(self, factory):
        rules = factory.make({"items.*.name": "required|max:10"})["rules"]

        assert rules["items[*][name]"][JAVASCRIPT_VALIDATION_RULE] == [
            ["Required", [], "The items.*.name field is required.", True, "items.*.name"],
            ["Max", ["10"], "The items.*.name must not be greater than 10 characters.", False, "items.*.name"],
        ]

    def test_wildcard_custom_attributes(self, factory):
        rules = factory.make({"items.*.name": "required"}, attributes={"items.*.name": "item name"})["rules"]

        assert rules["items[*][name]"][JAVASCRIPT_VALIDATION_RULE][0][2] == "The item name field is required."

    def test_custom_messages(self, factory):
        rules = factory.make({"name": "required"}, {"name.required": "Name please."})["rules"]

        assert rules["name"][JAVASCRIPT_VALIDATION_RULE][0][2] == "Name please."

    def test_escape(self, session):
        factory = JsValidatorFactory({"escape": True}, session=session)

        rules = factory.make({"name": "required"}, {"required": "<i>:attribute</i>"})["rules"]

        assert rules["name"][JAVASCRIPT_VALIDATION_RULE][0][2] == "&lt;i&gt;name&lt;/i&gt;"

    def test_validation_data(self):
        data = JsValidatorFactory.get_validation_data(
            {"items.*.name": "required", "email": "email"},
            {"user.name": "name"},
        )

        assert data == {
            "user": {"name": True},
            "items": {"__asterisk__": {"name": True}},
        }

    def test_format_implicit_attribute(self):
        assert format_implicit_attribute("items.__asterisk__.first_name") == "items.*.first name"


class TestFormRequest:
    """Tests for validators built from form requests."""

    def test_remote_form_request_class(self, factory):
        rules = factory.form_request(StoreUserRequest)["rules"]

        assert rules["name"] == {
            JAVASCRIPT_VALIDATION_RULE: [
                ["ProengsoftNoop", [], "validation.proengsoft_noop", False, "name"],
            ],
        }
        assert list(rules["email"]) == [JAVASCRIPT_VALIDATION_RULE]
        assert rules["proengsoft_jsvalidation"][FORM_REQUEST_RULE][0][:2] == [
            "ProengsoftFormRequest",
            ["proengsoft_jsvalidation", "csrf-token", False],
        ]

    def test_form_request_instance(self, factory):
        form = ContactRequest()

        validator = factory.form_request(form, "#contact")

        assert form.js_validator is validator
        assert validator["selector"] == "#contact"
        assert validator["rules"]["email"][JAVASCRIPT_VALIDATION_RULE] == [
            ["Required", [], "We need your e-mail.", True, "email"],
            ["Email", [], "The e-mail must be a valid email address.", False, "email"],
        ]

    def test_form_request_with_arguments(self, factory):
        form = factory.create_form_request((ContactRequest, [{"email": "a@b.c"}]))

        assert isinstance(form, ContactRequest)
        assert form.data == {"email": "a@b.c"}

    def test_form_request_bound_to_request(self, session):
        request = build_request(session=session)
        factory = JsValidatorFactory(request=request)

        form = factory.create_form_request(ContactRequest)

        assert form.request is request
        assert form.session is session

    def test_form_request_rules_from_query(self, session):
        factory = JsValidatorFactory(request=build_request("GET", "/users?role=admin", session=session))

        form = factory.create_form_request(RoleRequest)
        rules = factory.form_request(RoleRequest)["rules"]

        assert form.query.get("role") == "admin"
        assert list(rules) == ["name", "permissions"]

    def test_form_request_bound_to_session(self, session):
        form = JsValidatorFactory(session=session).create_form_request(ContactRequest)

        assert form.session is session


class TestValidator:
    """Tests for validators built from validator instances."""

    def test_validator(self, factory):
        validator = Validator({"age": 20}, {"age": "required|integer|min:18"})

        rules = factory.validator(validator, "#age")

        assert rules["selector"] == "#age"
        assert rules["rules"]["age"][JAVASCRIPT_VALIDATION_RULE][2] == [
            "Min", ["18"], "The age must be at least 18.", False, "age",
        ]


class TestShortcuts:
    """Tests for module-level shortcuts."""

    def test_make(self):
        validator = jsvalidation.make({"name": "required"}, selector="#name")

        assert validator["selector"] == "#name"

    def test_configure(self, session):
        factory = jsvalidation.configure({"form_selector": "#configured"}, session=session)

        assert jsvalidation.get_factory() is factory
        assert jsvalidation.make({})["selector"] == "#configured"

    def test_form_request(self):
        assert "proengsoft_jsvalidation" in jsvalidation.form_request(StoreUserRequest)["rules"]

    def test_validator(self):
        validator = jsvalidation.validator(Validator({}, {"name": "required"}))

        assert "name" in validator["rules"]
