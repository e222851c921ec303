"""Tests for common utilities."""

import json
import logging
import sys

from shortlinks.common.validators import is_valid_url, is_valid_short_code
from shortlinks.common.logging_config import JsonFormatter, get_logger, setup_logging
from web_app.urls import build_base_url, build_short_url


class TestValidators:
    """Test validation utilities."""
    
    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://example.com")
        assert valid
        
        valid, _ = is_valid_url("http://example.com/path")
        assert valid
        
        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value#frag")
        assert valid
        
        valid, _ = is_valid_url("https://a.test")
        assert valid
    
    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()
        
        valid, error = is_valid_url("not-a-url")
        assert not valid
        
        valid, error = is_valid_url("https://")
        assert not valid
        assert "domain" in error.lower()
        
        valid, error = is_valid_url("https://exa mple.com")
        assert not valid
        
        valid, error = is_valid_url("http://example.com:notaport/")
        assert not valid
        
        valid, error = is_valid_url("https://example.com/" + "a" * 2100)
        assert not valid
        assert "too long" in error.lower()
    
    def test_scheme_must_be_allowed(self):
        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()
        
        valid, _ = is_valid_url("ftp://example.com", allowed_schemes=["ftp"])
        assert valid
    
    def test_valid_short_codes(self):
        """Test valid short code validation."""
        for code in ("abc123", "a", "test-code", "test_code", "ABC", "Links"):
            valid, error = is_valid_short_code(code)
            assert valid, error
    
    def test_invalid_short_codes(self):
        """Test invalid short code validation."""
        valid, error = is_valid_short_code("")
        assert not valid
        assert "required" in error.lower()
        
        valid, error = is_valid_short_code("a" * 65)
        assert not valid
        assert "at most" in error.lower()
        
        valid, error = is_valid_short_code("abc@123")
        assert not valid
        
        valid, error = is_valid_short_code("a/b")
        assert not valid
        
        valid, error = is_valid_short_code("abc\n")
        assert not valid
        
        valid, error = is_valid_short_code("links")
        assert not valid
        assert "reserved" in error.lower()


class TestURLBuilding:
    """Test short URL building."""
    
    def test_base_url_from_forwarded_headers(self):
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "sho.rt",
        }
        
        base_url = build_base_url(headers, fallback_base_url="http://localhost:4000")
        assert base_url == "https://sho.rt"
    
    def test_base_url_keeps_first_forwarded_hop(self):
        headers = {
            "x-forwarded-proto": "https, http",
            "x-forwarded-host": "sho.rt, internal:4000",
        }
        
        assert build_base_url(headers, "http://localhost:4000") == "https://sho.rt"
    
    def test_base_url_from_request(self):
        base_url = build_base_url(
            {},
            fallback_base_url="http://localhost:4000",
            request_scheme="http",
            request_host="links.local:8080",
        )
        assert base_url == "http://links.local:8080"
    
    def test_base_url_fallback(self):
        assert build_base_url({}, "http://localhost:4000/") == "http://localhost:4000"
    
    def test_build_short_url_no_prefix(self):
        assert build_short_url("abc123", "https://example.com") == "https://example.com/abc123"
    
    def test_build_short_url_with_prefix(self):
        url = build_short_url("abc123", "https://example.com/", path_prefix="/s/")
        assert url == "https://example.com/s/abc123"


class TestLogging:
    """Test logging setup."""
    
    def test_setup_logging_replaces_handlers(self, tmp_path):
        log_file = tmp_path / "service.log"
        
        setup_logging(level="INFO")
        logger = setup_logging(level="DEBUG", log_file=str(log_file))
        
        assert logger.name == "shortlinks"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        
        get_logger("registry").info("hello file")
        for handler in logger.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")
        
        setup_logging(level="INFO")
    
    def test_console_stream_can_be_stderr(self, capsys):
        setup_logging(level="INFO", stream=sys.stderr)
        get_logger("cli").warning("to stderr")
        captured = capsys.readouterr()

        assert "to stderr" in captured.err
        assert captured.out == ""

        setup_logging(level="INFO")

    def test_unknown_level_falls_back_to_info(self):
        logger = setup_logging(level="chatty")
        assert logger.level == logging.INFO
    
    def test_json_formatter_escapes_message(self):
        record = logging.LogRecord(
            name="shortlinks.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg='quote " and newline \n here',
            args=None,
            exc_info=None,
        )
        
        payload = json.loads(JsonFormatter().format(record))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "shortlinks.test"
        assert payload["message"] == 'quote " and newline \n here'
