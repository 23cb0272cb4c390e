"""
JsValidation Validator
======================

Server-side validation engine for rule strings.

Validates data against rules and collects error messages
with the same semantics the JavaScript plugin reproduces.
"""

from __future__ import annotations

import inspect
import re
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from jsvalidation.core.request import UploadedFile
from jsvalidation.utils.helpers import (
    get_nested,
    has_nested,
    set_nested,
    snake_case,
    studly_case,
)
from jsvalidation.validation.concerns import (
    DEPENDENT_RULES,
    FILE_RULES,
    IMPLICIT_RULES,
    NUMERIC_RULES,
    SIZE_RULES,
    ReplacesAttributes,
    ValidatesAttributes,
)
from jsvalidation.validation.messages import MessageBag, Translator
from jsvalidation.validation.parser import (
    InvalidRuleError,
    ValidationRuleParser,
    wildcard_pattern,
)
from jsvalidation.validation.rules import Rule

if TYPE_CHECKING:
    from jsvalidation.core.response import Response
    from jsvalidation.validation.presence import PresenceVerifier


# Extension signature: (attribute, value, parameters, validator) -> bool
Extension = Callable[[str, Any, List[str], "Validator"], Any]

# Replacer signature: (message, attribute, rule, parameters, validator) -> str
Replacer = Callable[[str, str, str, List[str], "Validator"], str]


class ValidationError(Exception):
    """
    Validation failed exception.

    Carries the failed validator and, optionally, a ready response.
    """

    status_code = 422

    def __init__(
        self,
        validator: "Validator",
        response: Optional["Response"] = None,
        message: str = "The given data was invalid.",
    ) -> None:
        super().__init__(message)
        self.validator = validator
        self.response = response

    @property
    def errors(self) -> Dict[str, List[str]]:
        return self.validator.errors().messages()

    def first(self, field_name: Optional[str] = None) -> Optional[str]:
        """Get first error message."""
        return self.validator.errors().first(field_name)

    def __str__(self) -> str:
        errors = self.errors
        if errors:
            error_list = []
            for field_name, messages in errors.items():
                for msg in messages:
                    error_list.append(f"  - {field_name}: {msg}")
            return "Validation failed:\n" + "\n".join(error_list)
        return "Validation failed"


class Validator(ValidatesAttributes, ReplacesAttributes):
    """
    Main validation class.

    Example:
        validator = Validator(
            {"name": "John", "email": "not-an-email"},
            {"name": "required|max:100", "email": "required|email"},
            messages={"email.email": "Give us a real :attribute."},
            attributes={"email": "e-mail address"},
        )

        if validator.fails():
            print(validator.errors().messages())
    """

    def __init__(
        self,
        data: Dict[str, Any],
        rules: Dict[str, Any],
        messages: Optional[Dict[str, Any]] = None,
        attributes: Optional[Dict[str, str]] = None,
        translator: Optional[Translator] = None,
    ) -> None:
        """
        Initialize validator.

        Args:
            data: Data under validation (nested dicts/lists)
            rules: Rules per attribute; keys may contain `*` wildcards
            messages: Custom messages keyed `attribute.rule` or `rule`
            attributes: Custom attribute display names
            translator: Source of default lines
        """
        self.data = data
        self.custom_messages: Dict[str, Any] = dict(messages or {})
        self.custom_attributes: Dict[str, str] = dict(attributes or {})
        self.translator = translator or Translator()

        self.presence_verifier: Optional["PresenceVerifier"] = None
        self.extensions: Dict[str, Extension] = {}
        self.implicit_extensions: List[str] = []
        self.replacers: Dict[str, Replacer] = {}
        self.fallback_messages: Dict[str, str] = {}
        self.implicit_attributes_formatter: Optional[Callable[[str], str]] = None

        self.initial_rules: Dict[str, Any] = {}
        self.rules: Dict[str, List[Any]] = {}
        self.implicit_attributes: Dict[str, List[str]] = {}

        self._messages: Optional[MessageBag] = None
        self._failed_rules: Dict[str, Dict[str, List[str]]] = {}

        self.set_rules(rules)

    # =========================================================================
    # Running
    # =========================================================================

    def passes(self) -> bool:
        """
        Run the rules synchronously.

        Presence rules (`unique`, `exists`) pass here; use `passes_async`.
        """
        self._messages = MessageBag()
        self._failed_rules = {}

        for attribute, rules in list(self.rules.items()):
            for raw in rules:
                prepared = self._prepare(attribute, raw)
                if prepared is not None:
                    rule, parameters, value = prepared
                    if not self._check(rule, attribute, value, parameters):
                        self._add_failure(attribute, rule, parameters)

                if self._should_stop_validating(attribute):
                    break

        return not self._messages

    async def passes_async(self) -> bool:
        """Run the rules, awaiting async checks such as presence rules."""
        self._messages = MessageBag()
        self._failed_rules = {}

        for attribute, rules in list(self.rules.items()):
            for raw in rules:
                prepared = self._prepare(attribute, raw)
                if prepared is not None:
                    rule, parameters, value = prepared
                    if not await self._check_async(rule, attribute, value, parameters):
                        self._add_failure(attribute, rule, parameters)

                if self._should_stop_validating(attribute):
                    break

        return not self._messages

    def fails(self) -> bool:
        return not self.passes()

    async def fails_async(self) -> bool:
        return not await self.passes_async()

    def validate(self) -> Dict[str, Any]:
        """
        Validate and return the validated data.

        Raises:
            ValidationError: If any rule fails
        """
        if not self.passes():
            raise ValidationError(self)
        return self.validated()

    async def validate_async(self) -> Dict[str, Any]:
        if not await self.passes_async():
            raise ValidationError(self)
        return self.validated()

    def validated(self) -> Dict[str, Any]:
        """Data restricted to attributes under validation."""
        result: Dict[str, Any] = {}
        for attribute in self.rules:
            if has_nested(self.data, attribute):
                set_nested(result, attribute, get_nested(self.data, attribute))
        return result

    def errors(self) -> MessageBag:
        """Failure messages; runs the rules when they have not run yet."""
        if self._messages is None:
            self.passes()
        return self._messages

    messages = errors

    def failed(self) -> Dict[str, Dict[str, List[str]]]:
        """Failed rules per attribute with their parameters."""
        return self._failed_rules

    def _prepare(
        self,
        attribute: str,
        raw: Any,
    ) -> Optional[Tuple[Union[str, Rule], List[str], Any]]:
        rule, parameters = self.parse_rule(raw)
        if rule == "":
            return None

        if isinstance(rule, str) and rule in DEPENDENT_RULES:
            keys = self._get_explicit_keys(attribute)
            if keys:
                parameters = self._replace_asterisks(parameters, keys)

        value = self.get_value(attribute)

        if (
            isinstance(value, UploadedFile)
            and not value.is_valid()
            and self.has_rule(attribute, FILE_RULES + IMPLICIT_RULES)
        ):
            self._add_failure(attribute, "Uploaded", [])
            return None

        if not self._is_validatable(rule, attribute, value):
            return None

        return rule, parameters, value

    def _check(self, rule: Union[str, Rule], attribute: str, value: Any, parameters: List[str]) -> bool:
        if isinstance(rule, Rule):
            return bool(rule.validate(value, attribute, self.data))

        name = snake_case(rule)
        method = f"validate_{name}"
        if hasattr(ValidatesAttributes, method):
            return getattr(self, method)(attribute, value, parameters)

        extension = self.extensions.get(name)
        if extension is None:
            raise InvalidRuleError(f"Validation rule {rule} does not exist.")

        result = extension(attribute, value, parameters, self)
        if inspect.isawaitable(result):
            result.close()
            raise InvalidRuleError(f"Validation rule {rule} is async; use passes_async().")
        return bool(result)

    async def _check_async(
        self,
        rule: Union[str, Rule],
        attribute: str,
        value: Any,
        parameters: List[str],
    ) -> bool:
        if isinstance(rule, Rule):
            return bool(await rule.validate_async(value, attribute, self.data))

        name = snake_case(rule)
        if hasattr(ValidatesAttributes, f"validate_{name}_async"):
            return await getattr(self, f"validate_{name}_async")(attribute, value, parameters)
        if hasattr(ValidatesAttributes, f"validate_{name}"):
            return getattr(self, f"validate_{name}")(attribute, value, parameters)

        extension = self.extensions.get(name)
        if extension is None:
            raise InvalidRuleError(f"Validation rule {rule} does not exist.")

        handler = getattr(extension, "validate_async", None)
        result = handler(attribute, value, parameters, self) if handler else extension(attribute, value, parameters, self)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    def _is_validatable(self, rule: Union[str, Rule], attribute: str, value: Any) -> bool:
        return (
            self._present_or_rule_is_implicit(rule, attribute, value)
            and self._passes_optional_check(attribute)
            and self._is_not_null_if_marked_nullable(rule, attribute, value)
            and self._has_not_failed_previous_rule_if_presence_rule(rule, attribute)
        )

    def _present_or_rule_is_implicit(self, rule: Union[str, Rule], attribute: str, value: Any) -> bool:
        if isinstance(value, str) and value.strip() == "":
            return self.is_implicit(rule)
        return has_nested(self.data, attribute) or self.is_implicit(rule)

    def _passes_optional_check(self, attribute: str) -> bool:
        if not self.has_rule(attribute, "Sometimes"):
            return True
        return has_nested(self.data, attribute)

    def _is_not_null_if_marked_nullable(self, rule: Union[str, Rule], attribute: str, value: Any) -> bool:
        if self.is_implicit(rule):
            return True
        return not (value is None and self.has_rule(attribute, "Nullable"))

    def _has_not_failed_previous_rule_if_presence_rule(self, rule: Union[str, Rule], attribute: str) -> bool:
        if rule in ("Unique", "Exists"):
            return not self._messages.has(attribute)
        return True

    def _should_stop_validating(self, attribute: str) -> bool:
        if self.has_rule(attribute, "Bail"):
            return self._messages.has(attribute)

        failed = self._failed_rules.get(attribute, {})
        if "Uploaded" in failed:
            return True

        return self.has_rule(attribute, IMPLICIT_RULES) and any(r in IMPLICIT_RULES for r in failed)

    def _add_failure(self, attribute: str, rule: Union[str, Rule], parameters: List[str]) -> None:
        name = rule.name if isinstance(rule, Rule) else rule
        message = self.make_replacements(self.get_message(attribute, rule), attribute, name, parameters)
        self._messages.add(attribute, message)
        self._failed_rules.setdefault(attribute, {})[name] = parameters

    # =========================================================================
    # Data and rules
    # =========================================================================

    def get_data(self) -> Dict[str, Any]:
        return self.data

    def set_data(self, data: Dict[str, Any]) -> "Validator":
        """Replace the data under validation; exploded rules are kept."""
        self.data = data
        return self

    def get_value(self, attribute: str) -> Any:
        return get_nested(self.data, attribute)

    def get_rules(self) -> Dict[str, List[Any]]:
        return self.rules

    def set_rules(self, rules: Dict[str, Any]) -> "Validator":
        """Replace all rules, exploding them against the current data."""
        self.initial_rules = dict(rules)
        self.rules = {}
        self.implicit_attributes = {}
        self.add_rules(rules)
        return self

    def add_rules(self, rules: Dict[str, Any]) -> "Validator":
        """Merge additional rules into the current ones."""
        parsed = ValidationRuleParser(self.data).explode(rules)

        for attribute, attribute_rules in parsed.rules.items():
            self.rules.setdefault(attribute, []).extend(attribute_rules)
        for pattern, attributes in parsed.implicit_attributes.items():
            self.implicit_attributes.setdefault(pattern, []).extend(attributes)

        return self

    def explode_rules(self, rules: Dict[str, Any]) -> Dict[str, List[Any]]:
        """Explode rules against the current data without adding them."""
        return ValidationRuleParser(self.data).explode(rules).rules

    def sometimes(
        self,
        attribute: Union[str, Iterable[str]],
        rules: Any,
        callback: Callable[[Dict[str, Any]], bool],
    ) -> "Validator":
        """Add rules to attributes when the callback returns True for the data."""
        attributes = [attribute] if isinstance(attribute, str) else list(attribute)
        for key in attributes:
            if callback(self.data):
                self.add_rules({key: rules})
        return self

    @staticmethod
    def parse_rule(rule: Any) -> Tuple[Union[str, Rule], List[str]]:
        return ValidationRuleParser.parse(rule)

    def has_rule(self, attribute: str, rules: Union[str, Iterable[str]]) -> bool:
        return self.get_rule(attribute, rules) is not None

    def get_rule(
        self,
        attribute: str,
        rules: Union[str, Iterable[str]],
    ) -> Optional[Tuple[str, List[str]]]:
        """Find the first of `rules` on attribute, as `(name, parameters)`."""
        if attribute not in self.rules:
            return None

        names = {rules} if isinstance(rules, str) else set(rules)

        for raw in self.rules[attribute]:
            rule, parameters = self.parse_rule(raw)
            if isinstance(rule, str) and rule in names:
                return rule, parameters

        return None

    def is_implicit(self, rule: Union[str, Rule]) -> bool:
        if isinstance(rule, Rule):
            return bool(rule.implicit)
        return rule in IMPLICIT_RULES or rule in self.implicit_extensions

    def add_custom_attributes(self, attributes: Dict[str, str]) -> "Validator":
        self.custom_attributes.update(attributes)
        return self

    def set_custom_messages(self, messages: Dict[str, Any]) -> "Validator":
        self.custom_messages.update(messages)
        return self

    # =========================================================================
    # Extensions
    # =========================================================================

    def add_extensions(self, extensions: Dict[str, Extension]) -> None:
        for name, extension in extensions.items():
            self.extensions[snake_case(name)] = extension

    def add_implicit_extensions(self, extensions: Dict[str, Extension]) -> None:
        self.add_extensions(extensions)
        for name in extensions:
            self.implicit_extensions.append(studly_case(name))

    def add_replacers(self, replacers: Dict[str, Replacer]) -> None:
        for name, replacer in replacers.items():
            self.replacers[snake_case(name)] = replacer

    def set_fallback_messages(self, messages: Dict[str, str]) -> None:
        self.fallback_messages = {snake_case(k): v for k, v in messages.items()}

    # =========================================================================
    # Messages
    # =========================================================================

    def get_message(self, attribute: str, rule: Union[str, Rule]) -> str:
        """
        Resolve the unformatted message for a rule.

        Lookup order: inline `attribute.rule`, inline `rule`, translator
        `custom` lines, size-typed default line, default line, extension
        fallback message, then the `validation.<rule>` key itself.
        """
        if isinstance(rule, Rule):
            inline = self._get_inline_message(attribute, snake_case(rule.name))
            return inline if inline is not None else rule.get_message()

        lower = snake_case(rule)

        inline = self._get_inline_message(attribute, lower)
        if inline is not None:
            return inline

        custom = self._get_custom_translator_message(attribute, lower)
        if custom is not None:
            return custom

        if rule in SIZE_RULES:
            line = self.translator.get(f"{lower}.{self._get_attribute_type(attribute)}")
            if isinstance(line, str):
                return line

        line = self.translator.get(lower)
        if isinstance(line, str):
            return line

        if lower in self.fallback_messages:
            return self.fallback_messages[lower]

        return f"validation.{lower}"

    def _get_inline_message(self, attribute: str, lower_rule: str) -> Optional[str]:
        message = self._get_from_local(attribute, lower_rule, self.custom_messages)
        if isinstance(message, dict):
            message = message.get(self._get_attribute_type(attribute))
        return message

    def _get_custom_translator_message(self, attribute: str, lower_rule: str) -> Optional[str]:
        custom = self.translator.get("custom")
        if not isinstance(custom, dict):
            return None

        flattened = {
            f"{key}.{rule}": message
            for key, messages in custom.items()
            if isinstance(messages, dict)
            for rule, message in messages.items()
        }
        message = self._get_from_local(attribute, lower_rule, flattened, attribute_only=True)
        return message if isinstance(message, str) else None

    @staticmethod
    def _get_from_local(
        attribute: str,
        lower_rule: str,
        source: Dict[str, Any],
        attribute_only: bool = False,
    ) -> Optional[Any]:
        keys = [f"{attribute}.{lower_rule}"] if attribute_only else [f"{attribute}.{lower_rule}", lower_rule]

        for key in keys:
            for source_key, message in source.items():
                if source_key == key:
                    return message
                if "*" in source_key and wildcard_pattern(source_key).match(key):
                    return message

        return None

    def _get_attribute_type(self, attribute: str) -> str:
        if self.has_rule(attribute, NUMERIC_RULES):
            return "numeric"
        if self.has_rule(attribute, "Array"):
            return "array"
        if isinstance(self.get_value(attribute), UploadedFile):
            return "file"
        return "string"

    def make_replacements(
        self,
        message: str,
        attribute: str,
        rule: Union[str, Rule],
        parameters: List[str],
    ) -> str:
        """Fill the `:attribute`, `:input` and rule-specific placeholders."""
        name = rule.name if isinstance(rule, Rule) else rule

        message = self._replace_attribute_placeholder(message, self.get_display_name(attribute))
        message = self._replace_input_placeholder(message, attribute)

        lower = snake_case(name)
        if lower in self.replacers:
            return self.replacers[lower](message, attribute, lower, parameters, self)

        replacer = f"replace_{lower}"
        if hasattr(ReplacesAttributes, replacer) and parameters:
            return getattr(self, replacer)(message, attribute, name, parameters)

        return message

    @staticmethod
    def _replace_attribute_placeholder(message: str, value: str) -> str:
        return (
            message.replace(":attribute", value)
            .replace(":ATTRIBUTE", value.upper())
            .replace(":Attribute", value[:1].upper() + value[1:])
        )

    def _replace_input_placeholder(self, message: str, attribute: str) -> str:
        value = self.get_value(attribute)
        if isinstance(value, (str, int, float, bool)) or value is None:
            return message.replace(":input", self.get_displayable_value(attribute, value))
        return message

    def get_display_name(self, attribute: str) -> str:
        """
        Displayable name of an attribute.

        Custom attributes win, then translator `attributes` lines, then the
        attribute itself with underscores as spaces.
        """
        primary = self._get_primary_attribute(attribute)
        names = [attribute] if primary == attribute else [attribute, primary]

        for name in names:
            if name in self.custom_attributes:
                return self.custom_attributes[name]
            line = self.translator.get(f"attributes.{name}")
            if isinstance(line, str):
                return line

        for key, value in self.custom_attributes.items():
            if "*" in key and wildcard_pattern(key).match(attribute):
                return value

        if self.implicit_attributes_formatter is not None and primary != attribute:
            return self.implicit_attributes_formatter(attribute)

        return snake_case(attribute).replace("_", " ")

    def get_displayable_value(self, attribute: str, value: Any) -> str:
        """Displayable form of a value, honouring translator `values` lines."""
        primary = self._get_primary_attribute(attribute)
        line = self.translator.get(f"values.{primary}.{value}")
        if isinstance(line, str):
            return line
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return "empty"
        return str(value)

    def _get_primary_attribute(self, attribute: str) -> str:
        for pattern, attributes in self.implicit_attributes.items():
            if attribute in attributes:
                return pattern
        return attribute

    def _get_explicit_keys(self, attribute: str) -> List[str]:
        primary = self._get_primary_attribute(attribute)
        if "*" not in primary:
            return []

        pattern = "^" + re.escape(primary).replace(r"\*", "([^.]*)") + r"\Z"
        match = re.match(pattern, attribute)
        return list(match.groups()) if match else []

    @staticmethod
    def _replace_asterisks(parameters: List[str], keys: List[str]) -> List[str]:
        replaced = []
        for parameter in parameters:
            for key in keys:
                parameter = parameter.replace("*", key, 1)
            replaced.append(parameter)
        return replaced

    def __repr__(self) -> str:
        return f"<Validator attributes={list(self.rules)!r}>"
