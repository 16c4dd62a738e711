#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  4 09:14:33 2026

@author: mike
"""
import urllib3
from urllib3.util import Retry, Timeout

#######################################################
### Functions


def session(max_pool_connections: int = 10, max_attempts: int=3, read_timeout: int=120):
    """
    Function to setup a urllib3 pool manager for the signed requests.

    Parameters
    ----------
    max_pool_connections : int
        The number of simultaneous connections.
    max_attempts: int
        The number of retries if the connection fails.
    read_timeout: int
        The read timeout in seconds.

    Returns
    -------
    Pool Manager object
    """
    timeout = Timeout(read_timeout)
    retries = Retry(
        total=max_attempts,
        backoff_factor=1,
        )
    http = urllib3.PoolManager(num_pools=max_pool_connections, timeout=timeout, retries=retries)

    return http
