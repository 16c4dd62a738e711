#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  4 10:22:57 2026

@author: mike

Helpers that sign and send a request in one go. The signing itself never touches the network; everything here is a thin layer over the auth classes and a urllib3 pool manager.
"""
import logging
from typing import Dict, List

import urllib3

from . import http_url, utils
from .auth import QueryAuth, RestAuth, SigV4Auth, signature_key
from .errors import InvalidInputError
from .response import Response

logger = logging.getLogger(__name__)

#######################################################
### Parameters

supported_methods = ('GET', 'POST', 'PUT', 'DELETE', 'HEAD', 'PATCH', 'OPTIONS')
body_methods = ('POST', 'PUT')

form_content_type = 'application/x-www-form-urlencoded'


#######################################################
### Helper Functions


def _check_method(method):
    if method not in supported_methods:
        raise InvalidInputError(f'{method!r} is not one of {supported_methods}.')


def _get_session(session, session_kwargs):
    if session is None:
        session = http_url.session(**session_kwargs)
    return session


def send(session: urllib3.PoolManager, method: str, url: str, params: Dict[str, List[str]], headers: dict=None, stream: bool=False) -> Response:
    """
    Function to send signed params. POST and PUT send them as a form encoded body, every other method in the query string.

    Parameters
    ----------
    session : urllib3.PoolManager
        The pool manager from http_url.session.
    method : str
        The http method.
    url : str
        The url without a query string.
    params : dict of lists of str
        The signed params.
    headers : dict or None
        Extra http headers.
    stream : bool
        Should the body be left in the response for streaming instead of being read.

    Returns
    -------
    Response
    """
    if headers is None:
        headers = {}

    encoded = utils.encode_params(params)
    if method in body_methods:
        headers['Content-Type'] = form_content_type
        body = encoded
    else:
        if encoded:
            url = url + '?' + encoded
        body = None

    logger.debug('%s %s', method, url)

    resp = session.request(method, url, headers=headers, body=body, preload_content=not stream)

    return Response(resp, stream)


#######################################################
### Main functions


def query_request(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, session: urllib3.PoolManager=None, scheme: str='https', stream: bool=False, **session_kwargs) -> Response:
    """
    Function to sign the params with signature version 2 and send the request.

    Parameters
    ----------
    access_key : str
        The access key id also known as aws_access_key_id.
    secret_key : str
        The secret access key also known as aws_secret_access_key.
    method : str
        The http method, usually GET, POST, PUT, or DELETE.
    host : str
        e.g. sns.us-east-1.amazonaws.com.
    uri : str
        The resource path, "/" if there isn't one.
    params : dict
        The parameters required by the service.
    session : urllib3.PoolManager or None
        An existing pool manager. A new one is created with session_kwargs otherwise.
    scheme : str
        https unless you're testing.
    stream : bool
        Should the body be left in the response for streaming.

    Returns
    -------
    Response
    """
    _check_method(method)
    url = utils.build_url(host, uri, scheme)
    signed = QueryAuth(access_key, secret_key).sign(method, host, uri, params)

    return send(_get_session(session, session_kwargs), method, url, signed, stream=stream)


# The generic request helper has always signed with signature version 2
request = query_request


def rest_request(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, session: urllib3.PoolManager=None, scheme: str='https', stream: bool=False, **session_kwargs) -> Response:
    """
    Function to sign the params with the REST signature and send the request. The parameters are the same as query_request.
    """
    _check_method(method)
    url = utils.build_url(host, uri, scheme)
    signed = RestAuth(access_key, secret_key).sign(method, host, uri, params)

    return send(_get_session(session, session_kwargs), method, url, signed, stream=stream)


def v4_request(access_key: str, secret_key: str, method: str, host: str, uri: str, params: dict, payload_hash: str=None, session: urllib3.PoolManager=None, scheme: str='https', stream: bool=False, **session_kwargs) -> Response:
    """
    Function to sign the params with the partial signature version 4 and send them as http headers, with the signature in the Signature header. Nothing goes in the query string or the body.

    Parameters
    ----------
    payload_hash : str or None
        The hex sha256 of the body, see SigV4Auth.sign.

    The other parameters are the same as query_request.

    Returns
    -------
    Response
    """
    _check_method(method)
    url = utils.build_url(host, uri, scheme)
    signed, signature = SigV4Auth(access_key, secret_key).sign(method, host, uri, params, payload_hash)

    headers = {key: ','.join(values) for key, values in signed.items()}
    headers[signature_key] = signature

    session = _get_session(session, session_kwargs)
    logger.debug('%s %s', method, url)
    resp = session.request(method, url, headers=headers, preload_content=not stream)

    return Response(resp, stream)
