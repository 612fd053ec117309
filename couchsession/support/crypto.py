"""
Crypto - Token generation and credential encoding
"""
import base64
import secrets
from typing import Optional


class Crypto:
    """Centralized cryptography helper"""

    @staticmethod
    def generate_token(length: int = 32) -> str:
        """
        Generate URL-safe random token

        Args:
            length: Length of token in bytes (default: 32)

        Returns:
            URL-safe random string
        """
        return secrets.token_urlsafe(length)

    @staticmethod
    def basic_auth(username: Optional[str], password: Optional[str]) -> str:
        """
        Build an HTTP Basic Authorization header value

        Args:
            username: User name (may be empty)
            password: Password (may be empty)

        Returns:
            'Basic <base64(user:pass)>'
        """
        credentials = f"{username or ''}:{password or ''}".encode('utf-8')
        return 'Basic ' + base64.b64encode(credentials).decode('ascii')
