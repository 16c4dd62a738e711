#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Created on Mar  4 09:40:02 2026

@author: mike
"""
import xml.etree.ElementTree as ET

import orjson

#############################################################
### Parameters

request_id_headers = ('x-amzn-requestid', 'x-amz-request-id', 'x-amz-id-2')


#############################################################
### Helper functions


def _strip_ns(tag):
    return tag.split('}')[-1]


def metadata_from_headers(response):
    """
    Function to create metadata from the http headers/response.
    """
    metadata = {'status': response.status}

    for key, value in response.headers.items():
        key = key.lower()
        if key == 'content-length':
            metadata['content_length'] = int(value)
        elif key == 'content-type':
            metadata['content_type'] = value
        elif key in request_id_headers and 'request_id' not in metadata:
            metadata['request_id'] = value

    return metadata


def error_from_xml(data):
    """
    Parses the error documents of the query and REST APIs, e.g. <ErrorResponse><Error><Code/><Message/></Error><RequestId/></ErrorResponse> or <Error><Code/><Message/></Error>.
    """
    root = ET.fromstring(data)
    error = {}
    if _strip_ns(root.tag) != 'Error':
        for elem in root.iter():
            if _strip_ns(elem.tag) == 'Error':
                root_error = elem
                break
        else:
            root_error = root
        request_id = [e.text for e in root.iter() if _strip_ns(e.tag) == 'RequestId']
        if request_id:
            error['RequestId'] = request_id[0]
    else:
        root_error = root

    for child in root_error:
        error[_strip_ns(child.tag)] = child.text

    return error


def error_from_response(response):
    """

    """
    data = response.data
    try:
        if data.lstrip().startswith(b'<'):
            return error_from_xml(data)
        else:
            return orjson.loads(data)
    except (ET.ParseError, orjson.JSONDecodeError):
        return {'status': response.status, 'message': 'The response produced nonsense content.'}


#############################################################
### Response class


class Response:
    """
    Wraps the urllib3 response of a signed request. Http errors don't raise, they are parsed into the error attribute.
    """
    def __init__(self, response, stream_resp=False):
        """

        """
        self.status = response.status
        self.headers = dict(response.headers)
        self.metadata = metadata_from_headers(response)
        self.error = None
        self.stream = None
        self.data = None

        if (self.status // 100) == 2:
            if stream_resp:
                self.stream = response
            else:
                self.data = response.data
        else:
            self.error = error_from_response(response)

    def __repr__(self):
        return f'status: {self.status}'
