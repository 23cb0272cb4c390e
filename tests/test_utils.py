"""Tests for helpers and logging."""

import io
from datetime import date, datetime, timedelta

import orjson
import pytest

from jsvalidation.utils import (
    Logger,
    LogLevel,
    dot,
    dotted_name,
    get_nested,
    has_nested,
    html_name,
    is_numeric,
    parse_date,
    parse_date_format,
    set_nested,
    snake_case,
    str_is,
    studly_case,
    to_number,
)
from jsvalidation.utils.logger import JsonFormatter, StreamHandler, TextFormatter


class TestStrings:
    def test_snake_case(self):
        assert snake_case("RequiredWithoutAll") == "required_without_all"
        assert snake_case("first_name") == "first_name"
        assert snake_case("firstName") == "first_name"
        assert snake_case("HTMLParser") == "html_parser"

    def test_studly_case(self):
        assert studly_case("required_if") == "RequiredIf"
        assert studly_case("NoJsValidation") == "NoJsValidation"
        assert studly_case("date-format") == "DateFormat"

    def test_str_is(self):
        assert str_is("items.*.name", "items.0.name")
        assert str_is("email", "email")
        assert not str_is("items.*.name", "items.0.title")


class TestNestedData:
    """Tests for dot-notation helpers."""

    def test_get_nested(self):
        data = {"user": {"tags": ["a", "b"]}, "a.b": 1}

        assert get_nested(data, "user.tags.1") == "b"
        assert get_nested(data, "a.b") == 1
        assert get_nested(data, "user.missing", "default") == "default"
        assert get_nested(data, "user.tags.9") is None

    def test_has_nested(self):
        data = {"nick": None}

        assert has_nested(data, "nick")
        assert not has_nested(data, "name")

    def test_set_nested(self):
        assert set_nested({}, "a.b.c", 1) == {"a": {"b": {"c": 1}}}
        assert set_nested({"a": "scalar"}, "a.b", 1) == {"a": {"b": 1}}

    def test_set_nested_into_lists(self):
        data = {"items": [{"name": "a"}, {"name": "b"}]}

        set_nested(data, "items.1.name", "c")
        set_nested(data, "items.0", {"name": "z"})

        assert data == {"items": [{"name": "z"}, {"name": "c"}]}

    def test_dot(self):
        assert dot({"user": {"name": "x", "tags": ["a"]}, "empty": []}) == {
            "user.name": "x",
            "user.tags.0": "a",
            "empty": [],
        }

    def test_html_name(self):
        assert html_name("user.address.city") == "user[address][city]"
        assert html_name("items.*.name") == "items[*][name]"
        assert html_name("email") == "email"

    def test_dotted_name(self):
        assert dotted_name("user[address][city]") == "user.address.city"
        assert dotted_name("tags[]") == "tags"
        assert dotted_name(" email ") == "email"


class TestValues:
    def test_is_numeric(self):
        assert is_numeric(5)
        assert is_numeric("1e3")
        assert is_numeric(" -2.5 ")
        assert not is_numeric(True)
        assert not is_numeric("12abc")
        assert not is_numeric(None)

    def test_to_number(self):
        assert to_number("5") == 5
        assert isinstance(to_number("5"), int)
        assert to_number("5.0") == 5.0
        assert isinstance(to_number("5.0"), float)
        assert to_number(2.5) == 2.5

    def test_parse_date(self):
        assert parse_date("2024-01-15") == datetime(2024, 1, 15)
        assert parse_date("2024-01-15 10:30:00") == datetime(2024, 1, 15, 10, 30)
        assert parse_date("15 January 2024") == datetime(2024, 1, 15)
        assert parse_date(date(2024, 1, 1)) == datetime(2024, 1, 1)
        assert parse_date("not a date") is None
        assert parse_date("") is None
        assert parse_date(20240101) is None

    def test_parse_relative_dates(self):
        today = datetime.combine(date.today(), datetime.min.time())

        assert parse_date("today") == today
        assert parse_date("tomorrow") == today + timedelta(days=1)

    def test_parse_date_format(self):
        assert parse_date_format("15/01/2024 10:30", "d/m/Y H:i") == datetime(2024, 1, 15, 10, 30)
        assert parse_date_format("2024-01-15", "d/m/Y") is None
        assert parse_date_format(None, "Y-m-d") is None


class TestLogger:
    """Tests for structured logging."""

    def test_text_output(self):
        stream = io.StringIO()
        logger = Logger("jsvalidation.test", LogLevel.DEBUG, [StreamHandler(stream, TextFormatter())])

        logger.info("Remote validation", attribute="email")

        assert "[INFO] jsvalidation.test: Remote validation attribute=email" in stream.getvalue()

    def test_level_filtering(self):
        stream = io.StringIO()
        logger = Logger("jsvalidation.test", LogLevel.WARNING, [StreamHandler(stream)])

        logger.debug("hidden")
        logger.warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_json_output(self):
        stream = io.StringIO()
        logger = Logger("jsvalidation.test", LogLevel.DEBUG, [StreamHandler(stream, JsonFormatter())])

        logger.with_context(remote=True).debug("Rules converted", attributes=3)

        record = orjson.loads(stream.getvalue())
        assert record["level"] == "DEBUG"
        assert record["message"] == "Rules converted"
        assert record["context"] == {"remote": True, "attributes": 3}

    def test_exception(self):
        stream = io.StringIO()
        logger = Logger("jsvalidation.test", LogLevel.DEBUG, [StreamHandler(stream)])

        try:
            raise ValueError("boom")
        except ValueError as e:
            logger.error("Failed", exception=e)

        assert "ValueError: boom" in stream.getvalue()

    def test_parse_level(self):
        assert LogLevel.parse("debug") is LogLevel.DEBUG
        assert LogLevel.parse(30) is LogLevel.WARNING
        assert LogLevel.parse(LogLevel.ERROR) is LogLevel.ERROR

        with pytest.raises(KeyError):
            LogLevel.parse("verbose")
