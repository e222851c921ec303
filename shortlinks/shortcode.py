"""Short code generation utilities."""

import secrets
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for links."""
    
    def __init__(self, default_length: int = 8):
        """Initialize short code generator.
        
        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        self.default_length = default_length
    
    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random hexadecimal short code.
        
        Uses the operating system's cryptographically strong source, so
        codes cannot be predicted from previously issued ones.
        
        Args:
            length: Length of the code (uses default if not specified)
            
        Returns:
            Random short code
        """
        length = length or self.default_length
        # token_hex yields two characters per byte
        return secrets.token_hex((length + 1) // 2)[:length]
