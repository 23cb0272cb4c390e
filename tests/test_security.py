"""Tests for CSRF verification, encryption and escaping."""

import pytest

from jsvalidation.core import Response, build_request, chain
from jsvalidation.security import (
    CSRFConfig,
    DecryptError,
    EncryptionError,
    Encrypter,
    VerifyCsrfToken,
    csrf_field,
    csrf_meta,
    escape_html,
    escape_js,
    json_script,
)


async def endpoint(request):
    return Response("ok")


class TestEncrypter:
    def test_round_trip(self, encrypter):
        payload = encrypter.encrypt("csrf-token")

        assert payload != "csrf-token"
        assert encrypter.decrypt(payload) == "csrf-token"

    def test_other_secret(self, encrypter):
        payload = Encrypter("other-secret").encrypt("csrf-token")

        with pytest.raises(DecryptError):
            encrypter.decrypt(payload)

    def test_invalid_payload(self, encrypter):
        with pytest.raises(DecryptError):
            encrypter.decrypt("not-a-payload")
        with pytest.raises(DecryptError):
            encrypter.decrypt("payload-é")

    def test_secret_required(self):
        with pytest.raises(EncryptionError):
            Encrypter("")

    def test_bytes_secret(self, encrypter):
        assert Encrypter(b"test-secret").decrypt(encrypter.encrypt("x")) == "x"


class TestVerifyCsrfToken:
    """Tests for the CSRF middleware."""

    @pytest.mark.asyncio
    async def test_safe_methods(self):
        app = chain([VerifyCsrfToken()], endpoint)

        response = await app(build_request("GET"))

        assert response.body == b"ok"

    @pytest.mark.asyncio
    async def test_input_token(self, session):
        app = chain([VerifyCsrfToken()], endpoint)

        response = await app(build_request("POST", data={"_token": "csrf-token"}, session=session))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_header_token(self, session):
        app = chain([VerifyCsrfToken()], endpoint)

        response = await app(build_request("POST", headers={"X-CSRF-TOKEN": "csrf-token"}, session=session))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_encrypted_header_token(self, session, encrypter):
        app = chain([VerifyCsrfToken(encrypter)], endpoint)

        request = build_request("POST", headers={"X-XSRF-TOKEN": encrypter.encrypt("csrf-token")}, session=session)
        response = await app(request)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_encrypted_header(self, session, encrypter):
        app = chain([VerifyCsrfToken(encrypter)], endpoint)

        response = await app(build_request("POST", headers={"X-XSRF-TOKEN": "garbage"}, session=session))

        assert response.status_code == 419

    @pytest.mark.asyncio
    async def test_mismatch(self, session):
        app = chain([VerifyCsrfToken()], endpoint)

        response = await app(build_request("POST", data={"_token": "wrong"}, session=session))

        assert response.status_code == 419
        assert response.json() == {"message": "CSRF token mismatch."}

    @pytest.mark.asyncio
    async def test_non_ascii_token(self, session):
        app = chain([VerifyCsrfToken()], endpoint)

        response = await app(build_request("POST", data={"_token": "é"}, session=session))

        assert response.status_code == 419

    @pytest.mark.asyncio
    async def test_missing_session(self):
        app = chain([VerifyCsrfToken()], endpoint)

        response = await app(build_request("POST", data={"_token": "csrf-token"}))

        assert response.status_code == 419

    @pytest.mark.asyncio
    async def test_exempt_paths(self):
        app = chain([VerifyCsrfToken(exempt_paths=["/webhooks"])], endpoint)

        response = await app(build_request("POST", "/webhooks/stripe"))

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_custom_config(self, session):
        app = chain([VerifyCsrfToken(config=CSRFConfig(token_name="csrf", failure_status=403))], endpoint)

        assert (await app(build_request("POST", data={"csrf": "csrf-token"}, session=session))).status_code == 200
        assert (await app(build_request("POST", data={"_token": "csrf-token"}, session=session))).status_code == 403

    def test_template_helpers(self, session):
        assert csrf_field(session) == '<input type="hidden" name="_token" value="csrf-token">'
        assert csrf_meta(session) == '<meta name="csrf-token" content="csrf-token">'


class TestEscaping:
    def test_escape_html(self):
        assert escape_html('<a href="x">') == "&lt;a href=&quot;x&quot;&gt;"
        assert escape_html(None) == ""

    def test_escape_js(self):
        assert escape_js("it's <b>") == "it\\'s \\x3cb\\x3e"
        assert escape_js("") == ""

    def test_json_script(self):
        assert json_script({"a": "</script>"}) == '{"a":"\\u003c/script\\u003e"}'
        assert json_script(["a & b"]) == '["a \\u0026 b"]'
