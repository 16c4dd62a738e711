#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  3 10:20:07 2026

@author: mike
"""
import urllib.parse
from typing import Union

from .errors import InvalidInputError

#######################################################
### Parameters

# RFC 3986 section 2.3. urllib.parse.quote always leaves letters, digits and "_.-~" alone.
unreserved = '-_.~'


#######################################################
### Functions


def ensure_text(value: Union[str, bytes], name: str='value') -> str:
    """
    Make sure that a value can be used in a string to sign. Bytes must be valid UTF-8 and are decoded, strings must be encodable as UTF-8 (i.e. no lone surrogates).

    Parameters
    ----------
    value : str or bytes
        The value to check.
    name : str
        The name used in the error message.

    Returns
    -------
    str
    """
    if isinstance(value, bytes):
        try:
            return value.decode('utf-8')
        except UnicodeDecodeError as err:
            raise InvalidInputError(f'{name} is not valid UTF-8: {err}') from err
    elif isinstance(value, str):
        try:
            value.encode('utf-8')
        except UnicodeEncodeError as err:
            raise InvalidInputError(f'{name} is not valid UTF-8: {err}') from err
        return value
    else:
        raise TypeError(f'{name} must be a str or bytes, not {type(value).__name__}.')


def escape(value: Union[str, bytes]) -> str:
    """
    Percent encode a value the way the AWS signature protocols expect it. Every byte that isn't an ASCII letter, digit or one of "-_.~" becomes %XX with uppercase hex digits. A space is %20, never "+".

    Parameters
    ----------
    value : str or bytes
        The value to encode. Strings are UTF-8 encoded first.

    Returns
    -------
    str
    """
    if isinstance(value, str):
        value = ensure_text(value).encode('utf-8')

    return urllib.parse.quote(value, safe=unreserved)
