"""Authentication module — bcrypt passwords and signed bearer tokens."""

from inkwell.auth.service import AuthService
from inkwell.auth.tokens import decode_token, issue_token

__all__ = ["AuthService", "decode_token", "issue_token"]
