"""Integration tests for encryption endpoints."""

import base64

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr

from seal.domain.security.exceptions import AuthenticationError
from seal.infrastructure.security import AesGcmCipherService, KeyMaterial
from seal.presentation.api.app import _load_encryption_key, create_app
from seal.presentation.api.dependencies import get_cipher_service
from seal_config.settings import Settings


def _encrypt(client: TestClient, prefix: str, text: str | bytes, headers: dict):
    return client.post(f"{prefix}/encrypt", content=text, headers=headers)


def _decrypt(client: TestClient, prefix: str, text: str | bytes, headers: dict):
    return client.post(f"{prefix}/decrypt", content=text, headers=headers)


class TestEncrypt:
    """Tests for POST /api/v1/encrypt."""

    def test_encrypt_returns_base64_ciphertext(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        response = _encrypt(test_client, api_v1_prefix, "Hello World!", text_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text
        assert response.text != "Hello World!"
        base64.b64decode(response.text, validate=True)

    def test_encrypt_is_non_deterministic(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        first = _encrypt(test_client, api_v1_prefix, "same", text_headers)
        second = _encrypt(test_client, api_v1_prefix, "same", text_headers)

        assert first.text != second.text

    def test_encrypt_without_body(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        response = test_client.post(f"{api_v1_prefix}/encrypt", headers=text_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_encrypt_wrong_content_type(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/encrypt",
            json={"text": "Hello World!"},
        )

        assert response.status_code == 415
        assert response.json() == {
            "detail": "Content type must be text/plain",
            "code": "UNSUPPORTED_MEDIA_TYPE",
        }

    def test_encrypt_invalid_utf8_body(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        response = _encrypt(test_client, api_v1_prefix, b"\xff\xfe\xfd", text_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_encrypt_accepts_charset_parameter(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
    ):
        response = _encrypt(
            test_client,
            api_v1_prefix,
            "Hello",
            {"Content-Type": "text/plain; charset=utf-8"},
        )

        assert response.status_code == 200


class TestDecrypt:
    """Tests for POST /api/v1/decrypt."""

    def test_decrypt_invalid_base64(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        response = _decrypt(test_client, api_v1_prefix, "invalid-ciphertext", text_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_ENCODING"

    def test_decrypt_without_body(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        response = test_client.post(f"{api_v1_prefix}/decrypt", headers=text_headers)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"

    def test_decrypt_wrong_content_type(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/decrypt",
            json={"text": "encrypted-text"},
        )

        assert response.status_code == 415
        assert response.json()["code"] == "UNSUPPORTED_MEDIA_TYPE"

    def test_decrypt_tampered_ciphertext(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        encrypted = _encrypt(test_client, api_v1_prefix, "secret", text_headers).text
        envelope = bytearray(base64.b64decode(encrypted))
        envelope[15] ^= 0xFF
        tampered = base64.b64encode(bytes(envelope)).decode()

        response = _decrypt(test_client, api_v1_prefix, tampered, text_headers)

        assert response.status_code == 500
        assert response.json() == {
            "detail": "Decryption failed",
            "code": "DECRYPTION_FAILED",
        }

    def test_decrypt_foreign_ciphertext_matches_tamper_response(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        foreign = AesGcmCipherService(KeyMaterial.generate()).encrypt("secret")
        truncated = base64.b64encode(b"\x00" * 10).decode()

        foreign_response = _decrypt(test_client, api_v1_prefix, foreign, text_headers)
        truncated_response = _decrypt(test_client, api_v1_prefix, truncated, text_headers)

        assert foreign_response.status_code == truncated_response.status_code == 500
        assert foreign_response.json() == truncated_response.json()

    def test_decrypt_trims_whitespace(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        encrypted = _encrypt(test_client, api_v1_prefix, "Hello World!", text_headers).text

        response = _decrypt(test_client, api_v1_prefix, f"  {encrypted}\n", text_headers)

        assert response.status_code == 200
        assert response.text == "Hello World!"


class TestRoundTrip:
    """Encrypt then decrypt through the HTTP API."""

    @pytest.mark.parametrize(
        "plaintext",
        [
            "Hello World!",
            "Special chars: !@#$%^&*()_+-=[]{}|;':\",./<>?",
            "Unicode: 你好世界 🌍 émojis",
            "This is a long text for testing encryption and decryption. " * 1100,
        ],
    )
    def test_roundtrip(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
        plaintext: str,
    ):
        encrypted = _encrypt(test_client, api_v1_prefix, plaintext, text_headers)
        assert encrypted.status_code == 200

        decrypted = _decrypt(test_client, api_v1_prefix, encrypted.text, text_headers)

        assert decrypted.status_code == 200
        assert decrypted.text == plaintext

    def test_plaintext_whitespace_is_preserved_by_default(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        encrypted = _encrypt(test_client, api_v1_prefix, "  Hello World!  ", text_headers)

        decrypted = _decrypt(test_client, api_v1_prefix, encrypted.text, text_headers)

        assert decrypted.text == "  Hello World!  "

    def test_plaintext_is_trimmed_when_enabled(
        self,
        trimming_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        encrypted = _encrypt(trimming_client, api_v1_prefix, "  Hello World!  ", text_headers)

        decrypted = _decrypt(trimming_client, api_v1_prefix, encrypted.text, text_headers)

        assert decrypted.text == "Hello World!"

    def test_whitespace_only_body_encrypts_empty_string_when_trimming(
        self,
        trimming_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
    ):
        encrypted = _encrypt(trimming_client, api_v1_prefix, "   ", text_headers)
        assert encrypted.status_code == 200
        assert encrypted.text

        decrypted = _decrypt(trimming_client, api_v1_prefix, encrypted.text, text_headers)

        assert decrypted.status_code == 200
        assert decrypted.text == ""


class TestGenerateKey:
    """Tests for POST /api/v1/key/generate."""

    def test_generate_key(self, test_client: TestClient, api_v1_prefix: str):
        response = test_client.post(f"{api_v1_prefix}/key/generate")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        material = KeyMaterial.load(response.text)
        assert material.key_id > 0

    def test_generate_key_returns_new_key_each_time(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
    ):
        first = test_client.post(f"{api_v1_prefix}/key/generate").text
        second = test_client.post(f"{api_v1_prefix}/key/generate").text

        assert first != second

    def test_generate_key_does_not_replace_service_key(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
        api_key_material: KeyMaterial,
    ):
        encrypted = _encrypt(test_client, api_v1_prefix, "kept", text_headers).text

        new_key = test_client.post(f"{api_v1_prefix}/key/generate").text

        assert new_key != api_key_material.export()
        decrypted = _decrypt(test_client, api_v1_prefix, encrypted, text_headers)
        assert decrypted.text == "kept"


class TestSecrecy:
    def test_responses_never_contain_service_key(
        self,
        test_client: TestClient,
        api_v1_prefix: str,
        text_headers: dict,
        api_key_material: KeyMaterial,
    ):
        key = api_key_material.export()
        responses = [
            _encrypt(test_client, api_v1_prefix, "x", text_headers),
            _decrypt(test_client, api_v1_prefix, "invalid-ciphertext", text_headers),
            _decrypt(test_client, api_v1_prefix, "AAAA", text_headers),
            test_client.post(f"{api_v1_prefix}/key/generate"),
            test_client.get("/"),
        ]

        for response in responses:
            assert key not in response.text


class TestInfoEndpoints:
    def test_health(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_endpoints(self, test_client: TestClient, api_v1_prefix: str):
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["endpoints"]["encrypt"] == f"{api_v1_prefix}/encrypt"


class TestStartup:
    def test_invalid_key_stops_startup(self):
        app = FastAPI()

        def _broken_service():
            return AesGcmCipherService(KeyMaterial.load("not-a-valid-key!"))

        app.dependency_overrides[get_cipher_service] = _broken_service

        with pytest.raises(SystemExit) as exc_info:
            _load_encryption_key(app)

        assert exc_info.value.code == 1

    def test_non_keyset_key_stops_startup(self):
        app = FastAPI()
        raw_key = base64.b64encode(b"\x00" * 32).decode()

        def _broken_service():
            return AesGcmCipherService(KeyMaterial.load(raw_key))

        app.dependency_overrides[get_cipher_service] = _broken_service

        with pytest.raises(SystemExit):
            _load_encryption_key(app)

    def test_valid_key_starts(self):
        app = FastAPI()
        service = AesGcmCipherService(KeyMaterial.generate())
        app.dependency_overrides[get_cipher_service] = lambda: service

        _load_encryption_key(app)

    def test_invalid_key_in_explicit_settings_stops_startup(self):
        settings = Settings(encryption_key=SecretStr("not-a-valid-key!"))
        app = create_app(settings=settings)

        with pytest.raises(SystemExit) as exc_info:
            _load_encryption_key(app)

        assert exc_info.value.code == 1


class TestExplicitSettings:
    """An app built from a settings object uses that object end to end."""

    def test_encrypts_under_key_from_settings(self, api_v1_prefix: str, text_headers: dict):
        material = KeyMaterial.generate()
        settings = Settings(encryption_key=SecretStr(material.export()))

        with TestClient(create_app(settings=settings)) as client:
            response = _encrypt(client, api_v1_prefix, "hi", text_headers)

        assert response.status_code == 200
        assert AesGcmCipherService(material).decrypt(response.text) == "hi"
        with pytest.raises(AuthenticationError):
            AesGcmCipherService(KeyMaterial.generate()).decrypt(response.text)

    def test_honors_trim_setting(self, api_v1_prefix: str, text_headers: dict):
        material = KeyMaterial.generate()
        settings = Settings(
            encryption_key=SecretStr(material.export()),
            trim_plaintext=True,
        )

        with TestClient(create_app(settings=settings)) as client:
            response = _encrypt(client, api_v1_prefix, "  hi  ", text_headers)

        assert AesGcmCipherService(material).decrypt(response.text) == "hi"

    def test_two_apps_keep_their_own_keys(self, api_v1_prefix: str, text_headers: dict):
        first_key = KeyMaterial.generate()
        second_key = KeyMaterial.generate()
        first = create_app(settings=Settings(encryption_key=SecretStr(first_key.export())))
        second = create_app(settings=Settings(encryption_key=SecretStr(second_key.export())))

        with TestClient(first) as first_client, TestClient(second) as second_client:
            from_first = _encrypt(first_client, api_v1_prefix, "mine", text_headers).text
            from_second = _encrypt(second_client, api_v1_prefix, "mine", text_headers).text

        assert AesGcmCipherService(first_key).decrypt(from_first) == "mine"
        assert AesGcmCipherService(second_key).decrypt(from_second) == "mine"
        with pytest.raises(AuthenticationError):
            AesGcmCipherService(first_key).decrypt(from_second)
