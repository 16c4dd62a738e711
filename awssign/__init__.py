"""
Signing of AWS requests with signature version 2 (query APIs), the REST header signature, and a partial signature version 4.
"""
from .auth import QueryAuth, RestAuth, SigV4Auth, sign_query, sign_rest, sign_v4, presign_v4
from .canonical import Dialect, canonicalize
from .encoding import escape
from .errors import AwsSignError, InvalidInputError, EncodingContractViolation
from .request import query_request, rest_request, v4_request
from .signer import sign, string_to_sign, canonical_request, EMPTY_SHA256

__version__ = '0.1.0'
