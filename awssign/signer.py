#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  3 11:48:26 2026

@author: mike
"""
import base64
import hashlib
import hmac
from typing import Dict, List

from .canonical import canonical_headers
from .encoding import ensure_text
from .errors import EncodingContractViolation

#######################################################
### Parameters

# sha256 of an empty payload. It's used as is when the caller doesn't give the hash of the body; the v4 payload signing isn't implemented.
EMPTY_SHA256 = 'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

# base64 of a 32 byte digest
signature_length = 44


#######################################################
### Functions


def hmac_sha256(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode('utf-8'), hashlib.sha256).digest()


def sign(secret: str, string_to_sign: str) -> str:
    """
    Function to sign a string with HMAC-SHA256 and base64 encode the digest.

    Parameters
    ----------
    secret : str
        The secret access key.
    string_to_sign : str
        The string produced by string_to_sign.

    Returns
    -------
    str
    """
    secret = ensure_text(secret, 'secret')
    string_to_sign = ensure_text(string_to_sign, 'string to sign')

    digest = hmac_sha256(secret.encode('utf-8'), string_to_sign)
    signature = base64.b64encode(digest).decode('ascii')

    if len(signature) != signature_length:
        raise EncodingContractViolation(f'The signature should be {signature_length} characters, but is {len(signature)}.')

    return signature


def string_to_sign(method: str, host: str, uri: str, body: str) -> str:
    """
    HTTPVerb + "\\n" + lowercase host + "\\n" + uri + "\\n" + canonical body
    """
    return method + '\n' + host.lower() + '\n' + uri + '\n' + body


def canonical_request(method: str, uri: str, params: Dict[str, List[str]], payload_hash: str=None) -> str:
    """
    Function to build the signature v4 canonical request. The canonical query string is always empty and the payload hash defaults to the hash of an empty body.

    Parameters
    ----------
    method : str
        The http method.
    uri : str
        The resource path.
    params : dict of lists of str
        The parameters that are signed as headers.
    payload_hash : str or None
        The hex sha256 digest of the request body.

    Returns
    -------
    str
    """
    if payload_hash is None:
        payload_hash = EMPTY_SHA256

    header_block, signed_headers = canonical_headers(params)

    return '\n'.join([
        method,
        uri,
        '',
        header_block,
        signed_headers,
        payload_hash,
        ])
