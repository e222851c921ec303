"""Tests for short code generation."""

import re

import pytest
from shortlinks.shortcode import ShortCodeGenerator


HEX = re.compile(r"[0-9a-f]+")


class TestShortCodeGenerator:
    """Test short code generation."""
    
    def test_generate_random(self):
        """Default codes are 8 hex characters."""
        generator = ShortCodeGenerator()
        
        code = generator.generate_random()
        assert len(code) == 8
        assert HEX.fullmatch(code)
    
    def test_generate_random_custom_length(self):
        """Odd lengths are honoured too."""
        generator = ShortCodeGenerator(default_length=8)
        
        code = generator.generate_random(length=5)
        assert len(code) == 5
        assert HEX.fullmatch(code)
    
    def test_codes_vary(self):
        """Random codes do not repeat in a small sample."""
        generator = ShortCodeGenerator()
        
        codes = {generator.generate_random() for _ in range(200)}
        assert len(codes) == 200
    
    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=0)
