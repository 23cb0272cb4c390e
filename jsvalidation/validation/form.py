"""
JsValidation Form Requests
==========================

Form request classes declaring validation for one endpoint.

Features:
- Rules, messages and attribute names in one class
- Authorization hook
- Request and session binding
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from jsvalidation.core.request import QueryParams
from jsvalidation.core.response import JSONResponse
from jsvalidation.utils.helpers import has_nested
from jsvalidation.validation.factory import Factory, get_validation_factory
from jsvalidation.validation.validator import ValidationError, Validator

if TYPE_CHECKING:
    from jsvalidation.core.request import Request
    from jsvalidation.core.session import Session


class AuthorizationError(Exception):
    """Raised when a form request is not authorized."""

    status_code = 403

    def __init__(self, message: str = "This action is unauthorized.") -> None:
        super().__init__(message)
        self.response = JSONResponse({"message": message}, status_code=self.status_code)


class FormRequest:
    """
    Base form request.

    Override `rules()`, and optionally `messages()`, `attributes()` and
    `authorize()`.

    Example:
        class StoreUserRequest(FormRequest):
            def rules(self):
                return {
                    "name": "required|max:100",
                    "email": "required|email|unique:users",
                }

            def attributes(self):
                return {"email": "email address"}

        form = await StoreUserRequest.from_request(request)
        data = await form.validate_resolved()
    """

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        request: Optional["Request"] = None,
        session: Optional["Session"] = None,
        factory: Optional[Factory] = None,
    ) -> None:
        self.data: Dict[str, Any] = dict(data or {})
        self.request = request
        self.query: QueryParams = request.query if request is not None else QueryParams()
        self.session = session
        self.factory = factory
        self.validator: Optional[Validator] = None

    @classmethod
    async def from_request(cls, request: "Request", *args: Any, **kwargs: Any) -> "FormRequest":
        """Build the form request and bind it to the request input and session."""
        instance = cls(*args, **kwargs)
        await instance.bind_request(request)
        return instance

    async def bind_request(self, request: "Request") -> "FormRequest":
        self.request = request
        self.query = request.query
        self.data = await request.input()
        if request.has_session():
            self.session = request.session
        return self

    def set_session(self, session: "Session") -> "FormRequest":
        self.session = session
        return self

    # =========================================================================
    # Declarations
    # =========================================================================

    def rules(self) -> Dict[str, Any]:
        return {}

    def messages(self) -> Dict[str, Any]:
        return {}

    def attributes(self) -> Dict[str, str]:
        return {}

    def authorize(self) -> bool:
        return True

    # =========================================================================
    # Validation
    # =========================================================================

    def has(self, key: str) -> bool:
        return has_nested(self.data, key)

    def validation_data(self) -> Dict[str, Any]:
        return self.data

    def prepare_for_validation(self) -> None:
        """Hook to normalise data before validation."""
        pass

    def get_validator_instance(self) -> Validator:
        if self.validator is None:
            factory = self.factory or get_validation_factory(self.request)
            self.validator = factory.make(
                self.validation_data(),
                self.rules(),
                self.messages(),
                self.attributes(),
            )
        return self.validator

    async def validate_resolved(self) -> Dict[str, Any]:
        """
        Authorize and validate the bound data.

        Returns:
            Validated data

        Raises:
            AuthorizationError: If `authorize()` returns False
            ValidationError: If validation fails
        """
        self.prepare_for_validation()

        if not self.authorize():
            self.failed_authorization()

        validator = self.get_validator_instance()

        if not await validator.passes_async():
            self.failed_validation(validator)

        self.passed_validation()
        return validator.validated()

    def failed_authorization(self) -> None:
        raise AuthorizationError()

    def failed_validation(self, validator: Validator) -> None:
        response = JSONResponse(
            {"message": "The given data was invalid.", "errors": validator.errors().messages()},
            status_code=ValidationError.status_code,
        )
        raise ValidationError(validator, response)

    def passed_validation(self) -> None:
        """Hook run after validation passes."""
        pass

    def validated(self) -> Dict[str, Any]:
        return self.get_validator_instance().validated()
