"""JWT Decode: decode, inspect and verify HMAC-signed JSON Web Tokens."""

from .base64url import decode as b64url_decode
from .base64url import encode as b64url_encode
from .claims import Claims
from .decoder import DecodedToken, decode_token, parse
from .errors import (
    Base64DecodeError,
    DecodeError,
    ErrorKind,
    InvalidHeaderJSONError,
    InvalidPayloadJSONError,
    MalformedTokenError,
)
from .models import ExpiryState, Token, VerificationReport, VerificationResult, VerificationStatus
from .orchestrator import VerificationSession, verify_token
from .signer import generate_example, sign_token
from .verifier import SUPPORTED_ALGORITHMS, verify

__version__ = "2.0.0"

__all__ = [
    "SUPPORTED_ALGORITHMS",
    "Base64DecodeError",
    "Claims",
    "DecodeError",
    "DecodedToken",
    "ErrorKind",
    "ExpiryState",
    "InvalidHeaderJSONError",
    "InvalidPayloadJSONError",
    "MalformedTokenError",
    "Token",
    "VerificationReport",
    "VerificationResult",
    "VerificationSession",
    "VerificationStatus",
    "b64url_decode",
    "b64url_encode",
    "decode_token",
    "generate_example",
    "parse",
    "sign_token",
    "verify",
    "verify_token",
]
