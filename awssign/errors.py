#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  3 10:12:51 2026

@author: mike
"""


#######################################################
### Exceptions


class AwsSignError(Exception):
    """
    Base error for the awssign package.
    """


class InvalidInputError(AwsSignError, ValueError):
    """
    Raised when the caller supplies something that can't be signed: non UTF-8 secrets or values, an empty host, a malformed uri or an unsupported http method.
    """


class EncodingContractViolation(AwsSignError, AssertionError):
    """
    An internal invariant of the canonicalization or signing broke. This is a bug in awssign, not a runtime condition.
    """
