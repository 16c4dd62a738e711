#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  3 11:05:44 2026

@author: mike

Canonicalization of a parameter set for the three signing dialects. Query/V2 renders "key=value" pairs joined by "&" with the values percent encoded, REST and V4 render "name:value\\n" header lines with the values left as they are.
"""
import enum
from typing import Dict, List, Tuple

from .encoding import escape
from .errors import EncodingContractViolation

#######################################################
### Parameters

rest_headers = ('content-md5', 'content-type')
amz_prefix = 'x-amz'


class Dialect(enum.Enum):
    QUERY = 'query'
    REST = 'rest'
    V4 = 'v4'


#######################################################
### Functions


def amz_headers(params: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """
    Pulls out the parameters used as headers by the REST protocol: content-md5, content-type, and everything starting with x-amz (case insensitive). The names are lower-cased. If the same header is given in two different cases, the one inserted last wins.
    """
    headers = {}
    for key, values in params.items():
        lower = key.lower()
        if lower.startswith(amz_prefix) or lower in rest_headers:
            headers[lower] = values

    return headers


def _check_order(keys: List[str]):
    for prev, key in zip(keys, keys[1:]):
        if not prev < key:
            raise EncodingContractViolation(f'Canonical keys out of order: {prev!r} before {key!r}.')


def _render(key: str, values: List[str], dialect: Dialect) -> str:
    if dialect == Dialect.QUERY:
        # The "," between multiple values is never escaped
        return key + '=' + ','.join(escape(v) for v in values)
    else:
        return key.lower() + ':' + ','.join(values) + '\n'


def canonicalize(params: Dict[str, List[str]], dialect: Dialect=Dialect.QUERY) -> str:
    """
    Function to produce the canonical string of a parameter set.

    Parameters
    ----------
    params : dict of lists of str
        The normalized request parameters.
    dialect : Dialect
        QUERY for the query string of signature v2 (and the REST signing body), REST for the amz header block, V4 for the signature v4 header block.

    Returns
    -------
    str
    """
    dialect = Dialect(dialect)

    if dialect == Dialect.REST:
        params = amz_headers(params)

    keys = sorted(params)
    _check_order(keys)

    entries = [_render(key, params[key], dialect) for key in keys]

    if dialect == Dialect.QUERY:
        return '&'.join(entries)
    else:
        return ''.join(entries)


def signed_headers(params: Dict[str, List[str]]) -> str:
    """
    The ";" separated lower-cased header names in the same order as the V4 header block.
    """
    return ';'.join(key.lower() for key in sorted(params))


def canonical_headers(params: Dict[str, List[str]]) -> Tuple[str, str]:
    """
    Function to produce the V4 canonical header block and the signed header names.

    Returns
    -------
    tuple of (header block, signed header names)
    """
    return canonicalize(params, Dialect.V4), signed_headers(params)
