#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  3 10:41:19 2026

@author: mike
"""
import datetime
import urllib.parse
from typing import Dict, List, Union

from pydantic import HttpUrl, TypeAdapter, ValidationError

from .encoding import ensure_text
from .errors import InvalidInputError

#######################################################
### Parameters

rfc3339_format = '%Y-%m-%dT%H:%M:%SZ'

http_url_adapter = TypeAdapter(HttpUrl)


#######################################################
### Helper Functions


def build_params(params: Union[dict, None]) -> Dict[str, List[str]]:
    """
    Function to normalize a parameter mapping into a new dict of lists of strings. Values can be str, bytes, or a list/tuple of them. The input is never modified.

    Parameters
    ----------
    params : dict or None
        The request parameters.

    Returns
    -------
    dict
    """
    if params is None:
        return {}

    new_params = {}
    for key, values in params.items():
        key = ensure_text(key, 'parameter name')
        if isinstance(values, (str, bytes)):
            values = [values]
        elif not isinstance(values, (list, tuple)):
            raise TypeError(f'The values of {key} must be a str, bytes, or a list of them.')

        new_params[key] = [ensure_text(v, key) for v in values]

    return new_params




def get_param(params: Dict[str, List[str]], key: str) -> str:
    """
    Return the first value of key or an empty string.
    """
    values = params.get(key)
    if values:
        return values[0]
    return ''


def format_timestamp(timestamp: Union[datetime.datetime, str, None]=None) -> str:
    """
    Function to produce an RFC 3339 UTC timestamp (e.g. 2012-05-21T21:16:38Z). Strings are returned as is, naive datetimes are assumed to be UTC, and None means now.

    Parameters
    ----------
    timestamp : datetime, str, or None
        The timestamp to format.

    Returns
    -------
    str
    """
    if timestamp is None:
        timestamp = datetime.datetime.now(datetime.timezone.utc)
    elif isinstance(timestamp, str):
        return timestamp
    elif timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=datetime.timezone.utc)

    return timestamp.astimezone(datetime.timezone.utc).strftime(rfc3339_format)


def check_request(method: str, host: str, uri: str):
    """
    Validates the parts of the request that go into every string to sign.
    """
    if not isinstance(method, str) or not method or any(c.isspace() for c in method):
        raise InvalidInputError(f'{method!r} is not a valid http method.')
    if not isinstance(host, str) or not host.strip():
        raise InvalidInputError('host must be a non-empty string.')
    if not isinstance(uri, str) or not uri.startswith('/'):
        raise InvalidInputError(f'uri must start with "/", got {uri!r}.')

    ensure_text(host, 'host')
    ensure_text(uri, 'uri')


def encode_params(params: Dict[str, List[str]]) -> str:
    """
    Form encode the parameters for transmission (sorted keys, one pair per value, space as "+").
    """
    pairs = [(key, value) for key in sorted(params) for value in params[key]]

    return urllib.parse.urlencode(pairs)


def build_url(host: str, uri: str, scheme: str='https') -> str:
    """
    Function to build the request url from the host and uri and check that it's a proper http url.

    Parameters
    ----------
    host : str
        The host, e.g. sns.us-east-1.amazonaws.com.
    uri : str
        The resource path, starting with "/".
    scheme : str
        http or https.

    Returns
    -------
    str
    """
    url = f'{scheme}://{host}{uri}'
    try:
        http_url_adapter.validate_python(url)
    except ValidationError as err:
        raise InvalidInputError(f'{url} is not a proper http url.') from err

    return url
