"""Tests for configuration, session, request and response objects."""

import pytest

from jsvalidation.core import (
    Config,
    HTMLResponse,
    HttpResponseException,
    JSONResponse,
    Middleware,
    Request,
    Response,
    Session,
    build_request,
    chain,
    get_config,
)
from jsvalidation.core.config import config


class TestConfig:
    """Tests for configuration loading."""

    def test_defaults(self):
        cfg = Config(load_env=False)

        assert cfg.get("view") == "jsvalidation::bootstrap"
        assert cfg.get_bool("focus_on_error") is True
        assert cfg.get_int("duration_animate") == 1000
        assert cfg.get_list("view_paths") == []
        assert cfg.get("missing", "default") == "default"

    def test_app_data(self):
        cfg = Config({"form_selector": "#app"}, load_env=False)

        assert cfg.get("form_selector") == "#app"
        assert cfg.get("view") == "jsvalidation::bootstrap"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("JSVALIDATION_FORM_SELECTOR", "#env")
        monkeypatch.setenv("JSVALIDATION_DISABLE_REMOTE_VALIDATION", "true")
        monkeypatch.setenv("JSVALIDATION_DURATION_ANIMATE", "500")
        monkeypatch.setenv("JSVALIDATION_VIEW_PATHS", '["templates"]')

        cfg = Config({"form_selector": "#app"})

        assert cfg.get("form_selector") == "#env"
        assert cfg.get("disable_remote_validation") is True
        assert cfg.get("duration_animate") == 500
        assert cfg.get_list("view_paths") == ["templates"]

    def test_runtime_overrides(self, monkeypatch):
        monkeypatch.setenv("JSVALIDATION_VIEW", "jsvalidation::bootstrap4")
        cfg = Config()

        cfg.set("view", "jsvalidation::bootstrap5")
        cfg["escape"] = True

        assert cfg["view"] == "jsvalidation::bootstrap5"
        assert cfg.get_bool("escape") is True

    def test_dotted_keys(self):
        cfg = Config(load_env=False)
        cfg.set("views.paths", ["a"])

        assert cfg.get("views") == {"paths": ["a"]}
        assert cfg.get("views.paths") == ["a"]
        assert "views.paths" in cfg

    def test_get_bool_from_string(self):
        cfg = Config({"escape": "yes", "focus_on_error": "off"}, load_env=False)

        assert cfg.get_bool("escape") is True
        assert cfg.get_bool("focus_on_error") is False

    def test_get_int_invalid(self):
        assert Config({"duration_animate": "slow"}, load_env=False).get_int("duration_animate", 10) == 10

    def test_get_list_scalar(self):
        assert Config({"view_paths": "templates"}, load_env=False).get_list("view_paths") == ["templates"]

    def test_missing_key(self):
        with pytest.raises(KeyError):
            Config(load_env=False)["missing"]

    def test_from_file(self, tmp_path):
        path = tmp_path / "jsvalidation.py"
        path.write_text('config = {"view": "jsvalidation::bootstrap5", "escape": True}\n')

        cfg = Config.from_file(path, load_env=False)

        assert cfg.get("view") == "jsvalidation::bootstrap5"
        assert cfg.get_bool("escape") is True
        assert cfg.get("form_selector") == "form"

    def test_from_file_module_names(self, tmp_path):
        path = tmp_path / "settings.py"
        path.write_text('form_selector = "#file"\n_private = 1\nUPPER = 2\n')

        cfg = Config.from_file(path, load_env=False)

        assert cfg.get("form_selector") == "#file"
        assert cfg.get("_private") is None
        assert cfg.get("UPPER") is None

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_file(tmp_path / "missing.py")

    def test_global_config(self):
        get_config().set("form_selector", "#global")

        assert config("form_selector") == "#global"

    def test_config_module_importable(self):
        import jsvalidation.core.config as config_module

        assert config_module.get_config is get_config
        assert config_module.config is config


class TestSession:
    def test_token_created_lazily(self):
        session = Session("abc")

        token = session.token()

        assert len(token) == 40
        assert session.token() == token
        assert session["_token"] == token
        assert session.is_modified

    def test_existing_token(self):
        session = Session("abc", {"_token": "stored"})

        assert session.token() == "stored"
        assert not session.is_modified

    def test_regenerate_token(self):
        session = Session("abc", {"_token": "stored"})

        assert session.regenerate_token() != "stored"

    def test_mapping(self):
        session = Session("abc", {"user_id": 1})
        session["locale"] = "es"

        assert session.id == "abc"
        assert session.get("user_id") == 1
        assert "locale" in session
        assert len(session) == 2
        assert session.pop("locale") == "es"
        assert session.to_dict() == {"user_id": 1}


def make_receive(*chunks):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": index < len(chunks) - 1}
        for index, chunk in enumerate(chunks)
    ]

    async def receive():
        return messages.pop(0) if messages else {"type": "http.disconnect"}

    return receive


class TestRequest:
    """Tests for request parsing."""

    def test_scope(self):
        request = Request({
            "type": "http",
            "method": "post",
            "path": "/users",
            "query_string": b"page=2&user[id]=5",
            "headers": [(b"x-requested-with", b"XMLHttpRequest"), (b"cookie", b"a=1; b=2")],
        })

        assert request.method == "POST"
        assert request.path == "/users"
        assert request.query.get("page") == "2"
        assert request.query.to_dict() == {"page": "2", "user": {"id": "5"}}
        assert request.headers["X-Requested-With"] == "XMLHttpRequest"
        assert request.is_ajax
        assert request.cookies == {"a": "1", "b": "2"}
        assert repr(request) == "<Request POST /users>"

    @pytest.mark.asyncio
    async def test_form_fields_are_nested(self):
        request = build_request("POST", "/", [
            ("user[name]", "Jane"),
            ("user[address][city]", "Paris"),
            ("tags[]", "a"),
            ("tags[]", "b"),
        ])

        assert await request.input() == {
            "user": {"name": "Jane", "address": {"city": "Paris"}},
            "tags": ["a", "b"],
        }
        assert await request.has("user.address.city")
        assert not await request.has("user.email")

    @pytest.mark.asyncio
    async def test_body_read_once(self):
        request = Request(
            {"type": "http", "method": "POST", "headers": [(b"content-type", b"application/x-www-form-urlencoded")]},
            make_receive(b"name=Ja", b"ne"),
        )

        assert await request.body() == b"name=Jane"
        assert await request.input() == {"name": "Jane"}

    @pytest.mark.asyncio
    async def test_json(self):
        request = Request(
            {
                "type": "http",
                "method": "POST",
                "query_string": b"page=1",
                "headers": [(b"content-type", b"application/json")],
            },
            make_receive(b'{"email": "a@b.c", "page": 2}'),
        )

        assert await request.json() == {"email": "a@b.c", "page": 2}
        assert await request.input() == {"email": "a@b.c", "page": 2}

    @pytest.mark.asyncio
    async def test_multipart(self):
        body = (
            b"--XYZ\r\n"
            b'Content-Disposition: form-data; name="name"\r\n\r\n'
            b"Jane\r\n"
            b"--XYZ\r\n"
            b'Content-Disposition: form-data; name="avatar"; filename="me.png"\r\n'
            b"Content-Type: image/png\r\n\r\n"
            b"PNGDATA\r\n"
            b"--XYZ--\r\n"
        )
        request = Request(
            {"type": "http", "method": "POST", "headers": [(b"content-type", b"multipart/form-data; boundary=XYZ")]},
            make_receive(body),
        )

        data = await request.input()

        assert data["name"] == "Jane"
        avatar = data["avatar"]
        assert avatar.filename == "me.png"
        assert avatar.content_type == "image/png"
        assert avatar.read() == b"PNGDATA"
        assert avatar.size == 7
        assert avatar.is_valid()
        assert avatar.extension == "png"
        assert avatar.guess_extension() == "png"

    @pytest.mark.asyncio
    async def test_invalid_utf8_body(self):
        request = Request(
            {"type": "http", "method": "POST", "headers": [(b"content-type", b"application/x-www-form-urlencoded")]},
            make_receive(b"name=\xff&email=a@b.c"),
        )

        assert await request.input() == {"name": "\ufffd", "email": "a@b.c"}

    def test_query_in_path(self):
        request = build_request("POST", "/users?page=2", {"name": "Jane"})

        assert request.path == "/users"
        assert request.query.get("page") == "2"

    @pytest.mark.asyncio
    async def test_disconnect(self):
        request = Request({"type": "http", "method": "POST"}, make_receive())

        with pytest.raises(RuntimeError, match="disconnected"):
            await request.body()

    def test_session(self, session):
        request = build_request()

        assert not request.has_session()
        with pytest.raises(RuntimeError):
            request.session

        request.session = session

        assert request.has_session()
        assert request.session is session


class TestResponse:
    def test_json_response(self):
        response = JSONResponse(True)

        assert response.body == b"true"
        assert response.headers["Content-Type"] == "application/json"
        assert response.headers["Content-Length"] == "4"
        assert response.json() is True
        assert repr(response) == "<JSONResponse 200 OK>"

    def test_text_responses(self):
        assert Response("hi").headers["Content-Type"] == "text/plain; charset=utf-8"
        assert HTMLResponse("<p>hi</p>").headers["Content-Type"] == "text/html; charset=utf-8"
        assert Response().body == b""

    def test_status_phrase(self):
        assert JSONResponse({}, status_code=404).status_phrase == "Not Found"
        assert Response(status_code=419).status_phrase == "Unknown"

    @pytest.mark.asyncio
    async def test_send(self):
        sent = []

        async def send(message):
            sent.append(message)

        await JSONResponse(["taken"], status_code=200).send(send)

        assert sent[0]["type"] == "http.response.start"
        assert sent[0]["status"] == 200
        assert (b"content-type", b"application/json") in sent[0]["headers"]
        assert sent[1] == {"type": "http.response.body", "body": b'["taken"]'}

    def test_http_response_exception(self):
        response = JSONResponse(True)

        exc = HttpResponseException(response)

        assert exc.get_response() is response


class Recorder(Middleware):
    def __init__(self, name, calls):
        self.name = name
        self.calls = calls

    async def before(self, request):
        self.calls.append(f"{self.name}.before")

    async def after(self, request, response):
        self.calls.append(f"{self.name}.after")
        response.headers[f"X-{self.name}"] = "1"
        return response


class Blocker(Middleware):
    async def before(self, request):
        return JSONResponse({"blocked": True}, status_code=403)


class TestMiddleware:
    @pytest.mark.asyncio
    async def test_chain_order(self):
        calls = []

        async def endpoint(request):
            calls.append("endpoint")
            return Response("ok")

        app = chain([Recorder("outer", calls), Recorder("inner", calls)], endpoint)
        response = await app(build_request())

        assert calls == ["outer.before", "inner.before", "endpoint", "inner.after", "outer.after"]
        assert response.headers["X-outer"] == "1"

    @pytest.mark.asyncio
    async def test_early_response(self):
        async def endpoint(request):
            raise AssertionError("endpoint must not run")

        response = await chain([Blocker()], endpoint)(build_request())

        assert response.status_code == 403
