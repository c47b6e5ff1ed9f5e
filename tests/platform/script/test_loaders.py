"""Tests for script loaders."""

import base64
import io
from pathlib import Path

import httpx
import pytest

from polyscript.errors import LoaderError, SchemeUnsupportedError, ScriptNotAvailableError
from polyscript.platform.script.hashing import sha256_hex
from polyscript.platform.script.loader import (
    FromBytes,
    FromDisk,
    FromHTTP,
    FromReader,
    FromString,
    HTTPOptions,
    from_string_base64,
    infer_loader,
)


def _read(loader) -> bytes:
    with loader.get_reader() as reader:
        return reader.read()


class TestFromString:
    """Test inline string loading."""

    def test_content_trimmed(self):
        """Surrounding whitespace is removed."""
        loader = FromString("  print('hi')\n\n")
        assert _read(loader) == b"print('hi')"

    def test_source_url(self):
        """The URL carries a short content hash."""
        loader = FromString("1 + 1")
        assert loader.source_url.startswith("string://inline/")
        assert len(loader.source_url.rsplit("/", 1)[1]) == 8

    def test_readable_many_times(self):
        """Each reader starts at the beginning."""
        loader = FromString("abc")
        assert _read(loader) == _read(loader) == b"abc"

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_empty_rejected(self, content):
        """Blank content is not a script."""
        with pytest.raises(ScriptNotAvailableError):
            FromString(content)


class TestFromBytes:
    """Test inline byte loading."""

    def test_bytes_kept_verbatim(self):
        """Bytes are not trimmed or re-encoded."""
        loader = FromBytes(b"\x00\xffdata ")
        assert _read(loader) == b"\x00\xffdata "
        assert loader.source_url.startswith("bytes://inline/")

    @pytest.mark.parametrize("content", [b"", b"  \n"])
    def test_empty_rejected(self, content):
        with pytest.raises(ScriptNotAvailableError):
            FromBytes(content)


class TestFromReader:
    """Test stream loading."""

    def test_stream_drained_once(self):
        """The stream is consumed at construction and replayable after."""
        stream = io.BytesIO(b"x = 1")
        loader = FromReader(stream, "upload")

        assert stream.read() == b""
        assert _read(loader) == _read(loader) == b"x = 1"
        assert loader.source_url.startswith("reader://upload/")

    def test_unnamed_source(self):
        assert FromReader(io.BytesIO(b"1")).source_url.startswith("reader://unnamed/")

    def test_source_url_checksum(self):
        """The URL ends with the short content digest."""
        loader = FromReader(io.BytesIO(b"x = 1"), "upload")
        assert loader.source_url == f"reader://upload/{sha256_hex(b'x = 1')[:8]}"

    def test_empty_rejected(self):
        with pytest.raises(ScriptNotAvailableError):
            FromReader(io.BytesIO(b"   "))


class TestFromStringBase64:
    """Test base64 detection."""

    def test_decodes_base64(self):
        """Valid base64 is decoded into a bytes loader."""
        encoded = base64.b64encode(b"result = 42").decode()
        loader = from_string_base64(encoded)

        assert isinstance(loader, FromBytes)
        assert _read(loader) == b"result = 42"

    def test_falls_back_to_string(self):
        """Text that is not base64 is used as is."""
        loader = from_string_base64("ctx['a'] + 1")
        assert isinstance(loader, FromString)
        assert _read(loader) == b"ctx['a'] + 1"

    def test_empty_rejected(self):
        with pytest.raises(ScriptNotAvailableError):
            from_string_base64("  ")


class TestFromDisk:
    """Test filesystem loading."""

    def test_reads_file(self, tmp_path):
        """Absolute paths are read from disk."""
        script = tmp_path / "script.py"
        script.write_text("1 + 2")
        loader = FromDisk(script)

        assert _read(loader) == b"1 + 2"
        assert loader.source_url == script.as_uri()
        assert loader.checksum() is not None

    def test_file_url_accepted(self, tmp_path):
        script = tmp_path / "script.py"
        script.write_text("x")
        assert _read(FromDisk(f"file://{script}")) == b"x"

    def test_relative_path_rejected(self):
        with pytest.raises(ScriptNotAvailableError, match="relative"):
            FromDisk("scripts/test.py")

    @pytest.mark.parametrize("path", ["http://example.com/a.py", "https://example.com/a.py"])
    def test_http_rejected(self, path):
        with pytest.raises(SchemeUnsupportedError):
            FromDisk(path)

    def test_root_rejected(self):
        with pytest.raises(ScriptNotAvailableError):
            FromDisk("/")

    def test_missing_file(self, tmp_path):
        """Missing files fail when read, not when the loader is built."""
        loader = FromDisk(tmp_path / "missing.py")
        with pytest.raises(ScriptNotAvailableError, match="not found"):
            loader.get_reader()
        assert loader.checksum() is None


class TestFromHTTP:
    """Test HTTP loading with a mock transport."""

    def test_fetches_script(self):
        """A 200 response body becomes the script."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"'remote'")

        loader = FromHTTP("https://scripts.example.com/a.py", transport=httpx.MockTransport(handler))

        assert _read(loader) == b"'remote'"
        assert loader.source_url == "https://scripts.example.com/a.py"
        assert seen[0].headers["user-agent"] == "polyscript/http-loader"

    def test_non_success_status(self):
        """Non-2xx responses mean the script is not available."""
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        loader = FromHTTP("https://example.com/missing.py", transport=transport)

        with pytest.raises(ScriptNotAvailableError, match="404"):
            loader.get_reader()

    def test_transport_error(self):
        """Network failures are loader errors."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        loader = FromHTTP("https://example.com/a.py", transport=httpx.MockTransport(handler))
        with pytest.raises(LoaderError, match="failed to execute HTTP request"):
            loader.get_reader()

    def test_bearer_auth_and_headers(self):
        """Auth and extra headers are sent with the request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"1")

        options = HTTPOptions(headers={"X-Env": "test", "User-Agent": "custom"}).with_bearer_auth(
            "s3cret"
        )
        loader = FromHTTP("https://example.com/a.py", options, transport=httpx.MockTransport(handler))
        _read(loader)

        assert seen[0].headers["authorization"] == "Bearer s3cret"
        assert seen[0].headers["x-env"] == "test"
        assert seen[0].headers["user-agent"] == "custom"

    def test_basic_auth(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"1")

        options = HTTPOptions().with_basic_auth("user", "pass")
        loader = FromHTTP("https://example.com/a.py", options, transport=httpx.MockTransport(handler))
        _read(loader)

        expected = "Basic " + base64.b64encode(b"user:pass").decode()
        assert seen[0].headers["authorization"] == expected

    def test_header_auth(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=b"1")

        options = HTTPOptions().with_header_auth({"X-API-Key": "k"})
        loader = FromHTTP("https://example.com/a.py", options, transport=httpx.MockTransport(handler))
        _read(loader)

        assert seen[0].headers["x-api-key"] == "k"
        assert "authorization" not in seen[0].headers

    def test_options_are_immutable_copies(self):
        """with_* helpers leave the original options untouched."""
        base = HTTPOptions()
        updated = base.with_timeout(5).with_bearer_auth("t")

        assert base.timeout == 30.0
        assert base.auth_type == "none"
        assert updated.timeout == 5
        assert updated.auth_type == "bearer"

    def test_bearer_without_token(self):
        options = HTTPOptions(auth_type="bearer")
        loader = FromHTTP("https://example.com/a.py", options)
        with pytest.raises(LoaderError, match="bearer"):
            loader.get_reader()

    @pytest.mark.parametrize("url", ["ftp://example.com/a.py", "file:///tmp/a.py"])
    def test_unsupported_scheme(self, url):
        with pytest.raises(SchemeUnsupportedError):
            FromHTTP(url)


class TestInferLoader:
    """Test loader inference."""

    def test_loader_passthrough(self):
        loader = FromString("1")
        assert infer_loader(loader) is loader

    def test_bytes(self):
        assert isinstance(infer_loader(b"1"), FromBytes)

    def test_stream(self):
        loader = infer_loader(io.BytesIO(b"1"))
        assert isinstance(loader, FromReader)
        assert loader.source_url.startswith("reader://inferred/")

    def test_http_url(self):
        assert isinstance(infer_loader("https://example.com/a.py"), FromHTTP)

    def test_file_url(self, tmp_path):
        script = tmp_path / "a.py"
        script.write_text("1")
        assert isinstance(infer_loader(script.as_uri()), FromDisk)

    def test_path_like_string(self, tmp_path):
        script = tmp_path / "a.py"
        script.write_text("1")
        loader = infer_loader(str(script))
        assert isinstance(loader, FromDisk)

    def test_relative_path_resolved(self, tmp_path):
        """Relative paths resolve against the working directory."""
        (tmp_path / "scripts").mkdir()
        (tmp_path / "scripts" / "a.py").write_text("1")

        loader = infer_loader("scripts/a.py")
        assert isinstance(loader, FromDisk)
        assert loader.path == Path(tmp_path / "scripts" / "a.py").resolve()

    def test_pathlike(self, tmp_path):
        script = tmp_path / "a.py"
        script.write_text("1")
        assert isinstance(infer_loader(script), FromDisk)

    def test_inline_content(self):
        loader = infer_loader("ctx['x']")
        assert isinstance(loader, FromString)

    def test_unknown_scheme_is_inline(self):
        assert isinstance(infer_loader("custom://not-a-loader"), FromString)

    def test_empty_string(self):
        with pytest.raises(LoaderError):
            infer_loader("   ")

    def test_unsupported_type(self):
        with pytest.raises(LoaderError, match="unsupported input type"):
            infer_loader(42)
