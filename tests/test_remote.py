"""Tests for remote validation."""

import pytest

from jsvalidation.core.middleware import chain
from jsvalidation.core.request import build_request
from jsvalidation.core.response import HttpResponseException, JSONResponse
from jsvalidation.remote import (
    JsValidationFormRequest,
    RemoteValidationMiddleware,
    RemoteValidator,
    Resolver,
)
from jsvalidation.validation import FormRequest, Validator
from jsvalidation.validation.factory import STATE_KEY, Factory, get_validation_factory, set_validation_factory
from jsvalidation.validation.presence import InMemoryPresenceVerifier
from jsvalidation.validation.validator import ValidationError


class StoreUserRequest(FormRequest):
    def rules(self):
        return {
            "name": "required",
            "email": "required|email|unique:users",
            "nickname": "no_js_validation|unique:users,name",
        }


class UpdateProfileRequest(FormRequest):
    def rules(self):
        return {"user.email": "required|email|unique:users,email"}

    def messages(self):
        return {"user.email.unique": "<b>:attribute</b> is taken."}


class RegisterRequest(JsValidationFormRequest):
    def rules(self):
        return {"name": "required", "user.email": "required|email|unique:users,email"}


async def store_user(request):
    form = await StoreUserRequest.from_request(request)
    return JSONResponse({"saved": await form.validate_resolved()})


async def update_profile(request):
    form = await UpdateProfileRequest.from_request(request)
    return JSONResponse({"saved": await form.validate_resolved()})


async def register(request):
    form = await RegisterRequest.from_request(request)
    return JSONResponse({"saved": await form.validate_resolved()})


@pytest.fixture(autouse=True)
def users():
    verifier = InMemoryPresenceVerifier({
        "users": [{"id": 1, "name": "jane", "email": "taken@example.com"}],
    })
    set_validation_factory(Factory(presence_verifier=verifier))
    return verifier


def remote_request(field, **data):
    return build_request("POST", "/users", {"_jsvalidation": field, **data})


class TestRemoteValidationMiddleware:
    """Tests for AJAX validation through an ordinary endpoint."""

    @pytest.mark.asyncio
    async def test_remote_rule_fails(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        response = await app(remote_request("email", email="taken@example.com"))

        assert response.status_code == 200
        assert response.json() == ["The email has already been taken."]

    @pytest.mark.asyncio
    async def test_remote_rule_passes(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        response = await app(remote_request("email", email="new@example.com"))

        assert response.json() is True

    @pytest.mark.asyncio
    async def test_only_remote_rules_are_checked(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        response = await app(remote_request("email", email="not-an-email"))

        assert response.json() is True

    @pytest.mark.asyncio
    async def test_validate_all(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        response = await app(remote_request("email", email="not-an-email", _jsvalidation_validate_all="true"))

        assert response.json() == ["The email must be a valid email address."]

    @pytest.mark.asyncio
    async def test_other_attributes_are_ignored(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        response = await app(remote_request("email", email="new@example.com", name=""))

        assert response.json() is True

    @pytest.mark.asyncio
    async def test_disabled_attribute_passes(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        response = await app(remote_request("nickname", nickname="jane"))

        assert response.json() is True

    @pytest.mark.asyncio
    async def test_nested_attribute(self):
        app = chain([RemoteValidationMiddleware()], update_profile)

        request = build_request("POST", "/profile", [
            ("_jsvalidation", "user[email]"),
            ("user[email]", "taken@example.com"),
        ])
        response = await app(request)

        assert response.json() == ["<b>user.email</b> is taken."]

    @pytest.mark.asyncio
    async def test_escaped_messages(self):
        app = chain([RemoteValidationMiddleware(escape=True)], update_profile)

        request = build_request("POST", "/profile", [
            ("_jsvalidation", "user[email]"),
            ("user[email]", "taken@example.com"),
        ])
        response = await app(request)

        assert response.json() == ["&lt;b&gt;user.email&lt;/b&gt; is taken."]

    @pytest.mark.asyncio
    async def test_custom_field(self):
        app = chain([RemoteValidationMiddleware(field="_validate")], store_user)

        request = build_request("POST", "/users", {"_validate": "email", "email": "taken@example.com"})
        response = await app(request)

        assert response.json() == ["The email has already been taken."]

    @pytest.mark.asyncio
    async def test_regular_request_passes_through(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        request = build_request("POST", "/users", {"name": "John", "email": "john@example.com"})
        response = await app(request)

        assert response.json() == {"saved": {"name": "John", "email": "john@example.com"}}
        assert STATE_KEY not in request.state

    @pytest.mark.asyncio
    async def test_regular_request_validation_errors(self):
        app = chain([RemoteValidationMiddleware()], store_user)

        with pytest.raises(ValidationError) as exc_info:
            await app(build_request("POST", "/users", {"name": "", "email": "taken@example.com"}))

        assert exc_info.value.errors == {
            "name": ["The name field is required."],
            "email": ["The email has already been taken."],
        }

    @pytest.mark.asyncio
    async def test_request_scoped_factory(self):
        middleware = RemoteValidationMiddleware()
        request = remote_request("email")

        await middleware.before(request)

        assert get_validation_factory(request) is request.state[STATE_KEY]
        assert get_validation_factory(request) is not get_validation_factory()
        assert "jsvalidation" in request.state[STATE_KEY].extensions


class TestRemoteValidator:
    """Tests for validators wrapped by the resolver."""

    def remote_factory(self):
        factory = Factory()
        resolver = Resolver(factory)
        factory.resolver(resolver.resolver("_jsvalidation"))
        factory.extend("jsvalidation", resolver.validator_closure())
        return factory

    def test_resolver_adds_remote_rule(self):
        validator = self.remote_factory().make({"_jsvalidation": "email"}, {"email": "required"})

        assert list(validator.get_rules()) == ["_jsvalidation", "email"]
        assert validator.get_rules()["_jsvalidation"] == ["bail", "jsvalidation:false"]

    def test_validate_all_flag(self):
        validator = self.remote_factory().make(
            {"_jsvalidation": "email", "_jsvalidation_validate_all": "true"},
            {"email": "required"},
        )

        assert validator.get_rules()["_jsvalidation"] == ["bail", "jsvalidation:true"]

    def test_sync_validation(self):
        validator = self.remote_factory().make(
            {"_jsvalidation": "email", "_jsvalidation_validate_all": "true", "email": "x"},
            {"email": "required|email"},
        )

        with pytest.raises(HttpResponseException) as exc_info:
            validator.passes()

        response = exc_info.value.get_response()
        assert response.status_code == 200
        assert response.json() == ["The email must be a valid email address."]

    def test_sync_validation_without_remote_rules(self):
        validator = self.remote_factory().make({"_jsvalidation": "email", "email": "x"}, {"email": "required|email"})

        with pytest.raises(HttpResponseException) as exc_info:
            validator.passes()

        assert exc_info.value.get_response().json() is True

    def test_parse_attribute_name(self):
        assert RemoteValidator.parse_attribute_name("user[address][city]") == "user.address.city"
        assert RemoteValidator.parse_attribute_name(None) == ""

    def test_parse_validate_all(self):
        assert RemoteValidator.parse_validate_all(["true"]) is True
        assert RemoteValidator.parse_validate_all(["false"]) is False
        assert RemoteValidator.parse_validate_all([]) is False

    def test_set_remote_validation(self):
        validator = Validator({}, {"email": "required|email|unique:users"})

        RemoteValidator(validator).set_remote_validation("email")

        assert validator.get_rules() == {"email": ["unique:users"]}

    def test_set_remote_validation_all(self):
        validator = Validator({}, {"email": "required|email|unique:users"})

        RemoteValidator(validator).set_remote_validation("email", validate_all=True)

        assert validator.get_rules() == {"email": ["required", "email", "unique:users"]}


class TestJsValidationFormRequest:
    """Tests for whole-form AJAX validation."""

    @pytest.mark.asyncio
    async def test_errors_keyed_by_field_name(self):
        app = chain([RemoteValidationMiddleware()], register)

        request = build_request("POST", "/register", [
            ("__proengsoft_form_request", "1"),
            ("name", ""),
            ("user[email]", "taken@example.com"),
        ])
        response = await app(request)

        assert response.status_code == 422
        assert response.json() == {
            "name": ["The name field is required."],
            "user[email]": ["The user.email has already been taken."],
        }

    @pytest.mark.asyncio
    async def test_passes(self):
        app = chain([RemoteValidationMiddleware()], register)

        request = build_request("POST", "/register", [
            ("__proengsoft_form_request", "1"),
            ("name", "John"),
            ("user[email]", "john@example.com"),
        ])
        response = await app(request)

        assert response.status_code == 200
        assert response.json() is True

    @pytest.mark.asyncio
    async def test_regular_submission(self):
        app = chain([RemoteValidationMiddleware()], register)

        request = build_request("POST", "/register", [("name", "John"), ("user[email]", "john@example.com")])
        response = await app(request)

        assert response.json() == {"saved": {"name": "John", "user": {"email": "john@example.com"}}}

    @pytest.mark.asyncio
    async def test_regular_submission_errors(self):
        app = chain([RemoteValidationMiddleware()], register)

        with pytest.raises(ValidationError) as exc_info:
            await app(build_request("POST", "/register", [("name", "")]))

        assert exc_info.value.response.status_code == 422
        assert set(exc_info.value.errors) == {"name", "user.email"}
