#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  3 13:02:10 2026

@author: mike
"""
import datetime
import logging
from typing import Dict, List, Tuple, Union

from . import utils
from .canonical import Dialect, canonicalize
from .encoding import ensure_text
from .signer import canonical_request, sign, string_to_sign

logger = logging.getLogger(__name__)

#######################################################
### Parameters

Timestamp = Union[datetime.datetime, str, None]

signature_key = 'Signature'
date_headers = ('date', 'x-amz-date')


#######################################################
### Auth classes


class BaseAuth:
    """

    """
    def __init__(self, access_key: str, secret_key: str):
        """
        Parameters
        ----------
        access_key : str
            The access key id also known as aws_access_key_id.
        secret_key : str
            The secret access key also known as aws_secret_access_key.
        """
        self.access_key = ensure_text(access_key, 'access_key')
        self.secret_key = ensure_text(secret_key, 'secret_key')

    def _prepare(self, method, host, uri, params):
        """
        Validate the request and return a private copy of the params without any previous signature.
        """
        utils.check_request(method, host, uri)
        params = utils.build_params(params)
        params.pop(signature_key, None)

        return params

    def _sign(self, method, host, uri, body):
        sts = string_to_sign(method, host, uri, body)
        logger.debug('String to sign: %r', sts)

        return sign(self.secret_key, sts)

    def __repr__(self):
        return f'{self.__class__.__name__}(access_key={self.access_key!r})'


class QueryAuth(BaseAuth):
    """
    Signature version 2 for the query APIs (SNS, SQS, SimpleDB, etc). The signature goes into the parameters.
    """
    def sign(self, method: str, host: str, uri: str, params: dict, timestamp: Timestamp=None) -> Dict[str, List[str]]:
        """
        Sign the request parameters. The params passed in aren't modified.

        Parameters
        ----------
        method : str
            The http method, usually GET, POST, PUT, or DELETE.
        host : str
            The host, e.g. sns.us-east-1.amazonaws.com.
        uri : str
            The resource path, "/" if there isn't one.
        params : dict
            The parameters required by the service. A key with several values is signed with the values separated by ",".
        timestamp : datetime, str, or None
            Only used if params has no Timestamp. Defaults to now.

        Returns
        -------
        dict of lists of str
            The params with SignatureVersion, SignatureMethod, AWSAccessKeyId, Timestamp, and Signature.
        """
        params = self._prepare(method, host, uri, params)

        params['SignatureVersion'] = ['2']
        params['SignatureMethod'] = ['HmacSHA256']
        params['AWSAccessKeyId'] = [self.access_key]
        if not utils.get_param(params, 'Timestamp'):
            params['Timestamp'] = [utils.format_timestamp(timestamp)]

        body = canonicalize(params, Dialect.QUERY)
        params[signature_key] = [self._sign(method, host, uri, body)]

        return params


class RestAuth(BaseAuth):
    """
    The header based REST signature. The amz and content headers are pulled out of the params and a date is added if neither date nor x-amz-date is there, but the string to sign uses the canonical query string of all the params.
    """
    @staticmethod
    def amz_headers(params: dict) -> str:
        """
        The canonical "name:value\\n" block of content-md5, content-type, and the x-amz headers.
        """
        return canonicalize(utils.build_params(params), Dialect.REST)

    def sign(self, method: str, host: str, uri: str, params: dict, timestamp: Timestamp=None) -> Dict[str, List[str]]:
        """
        Sign the request parameters. The params passed in aren't modified.

        Parameters
        ----------
        method : str
            The http method.
        host : str
            The host.
        uri : str
            The resource path, e.g. /bucket/object.
        params : dict
            The headers and parameters of the request.
        timestamp : datetime, str, or None
            The value of the date header if the params have neither date nor x-amz-date. Defaults to now.

        Returns
        -------
        dict of lists of str
        """
        params = self._prepare(method, host, uri, params)

        if not any(key.lower() in date_headers for key in params):
            params['date'] = [utils.format_timestamp(timestamp)]

        logger.debug('Amz headers: %r', canonicalize(params, Dialect.REST))

        body = canonicalize(params, Dialect.QUERY)
        params[signature_key] = [self._sign(method, host, uri, body)]

        return params


class SigV4Auth(BaseAuth):
    """
    A partial signature version 4 where all the params are signed as headers. There's no canonical query string and the payload hash is the hash of an empty body unless it's passed.
    """
    def canonical_request(self, method: str, uri: str, params: Dict[str, List[str]], payload_hash: str=None) -> str:
        return canonical_request(method, uri, params, payload_hash)

    def sign(self, method: str, host: str, uri: str, params: dict, payload_hash: str=None, timestamp: Timestamp=None) -> Tuple[Dict[str, List[str]], str]:
        """
        Sign the request without putting the signature in the params. This is the path for sending the params as headers.

        Parameters
        ----------
        method : str
            The http method.
        host : str
            The host.
        uri : str
            The resource path.
        params : dict
            The headers to sign.
        payload_hash : str or None
            The hex sha256 of the body.
        timestamp : datetime, str, or None
            The Date to sign with. Defaults to now.

        Returns
        -------
        tuple of (params, signature)
        """
        params = self._prepare(method, host, uri, params)
        params['Date'] = [utils.format_timestamp(timestamp)]

        creq = self.canonical_request(method, uri, params, payload_hash)
        logger.debug('Canonical request: %r', creq)

        return params, self._sign(method, host, uri, creq)

    def query_string(self, method: str, host: str, uri: str, params: dict, payload_hash: str=None, timestamp: Timestamp=None, scheme: str='https') -> str:
        """
        Returns a pre-signed url with the Signature in the query string, e.g. for handing out links to S3 objects.
        """
        params, signature = self.sign(method, host, uri, params, payload_hash, timestamp)
        params[signature_key] = [signature]

        return utils.build_url(host, uri, scheme) + '?' + utils.encode_params(params)


#######################################################
### Functions


def sign_query(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, timestamp: Timestamp=None):
    """
    Signature version 2 of the params. See QueryAuth.sign.
    """
    return QueryAuth(access_key, secret_key).sign(method, host, uri, params, timestamp)


def sign_rest(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, timestamp: Timestamp=None):
    """
    REST signature of the params. See RestAuth.sign.
    """
    return RestAuth(access_key, secret_key).sign(method, host, uri, params, timestamp)


def sign_v4(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, payload_hash: str=None, timestamp: Timestamp=None):
    """
    Partial signature version 4. See SigV4Auth.sign.
    """
    return SigV4Auth(access_key, secret_key).sign(method, host, uri, params, payload_hash, timestamp)


def presign_v4(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, payload_hash: str=None, timestamp: Timestamp=None, scheme: str='https'):
    """
    Pre-signed url. See SigV4Auth.query_string.
    """
    return SigV4Auth(access_key, secret_key).query_string(method, host, uri, params, payload_hash, timestamp, scheme)
