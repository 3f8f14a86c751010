import json
import logging
from datetime import datetime, timedelta, timezone

from django.conf import settings
from rest_framework import status as http_status
from rest_framework.response import Response

from common.consts.response_const import RET_OK, RET_ERR

logger = logging.getLogger(__name__)


def with_type(data):
    """
    Convert numeric string to int, true to True, false to False

    @param data: data to convert
    @return: converted data
    """
    try:
        if isinstance(data, list):
            return [with_type(item) for item in data]
        if isinstance(data, dict):
            return {key: with_type(value) for key, value in data.items()}

        if data is None:
            return None
        if isinstance(data, (int, bool)):
            return data
        if isinstance(data, float):
            return data
        if isinstance(data, str):
            if data.isnumeric():
                return int(data)
            if data.lower() == "true":
                return True
            if data.lower() == "false":
                return False
            return data

        raise TypeError(f"Unsupported data type: {type(data)}")
    except Exception as e:
        logger.error(f"Error processing data: {data}, error: {e}")
        raise


def with_json_list(data):
    """
    Multipart forms carry lists as JSON strings, decode them

    '["a@x.com"]' -> ["a@x.com"]
    None -> None
    anything that is not a JSON string is returned as it is

    @raise ValueError: if a string is not valid JSON
    """
    if isinstance(data, str):
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON format: {e.msg}") from e
    return data


def resp_ok(data=None):
    response = Response({
        "data": data,
        "code": RET_OK,
        "errmsg": ""
    }, status=http_status.HTTP_200_OK)
    response["Expires"] = (datetime.now(timezone.utc) + timedelta(seconds=5)).strftime("%a, %d %b %Y %H:%M:%S %Z")
    return response


def resp_err(message, code=RET_ERR, status=http_status.HTTP_200_OK):
    return Response({
        "data": None,
        "code": code,
        "errmsg": message
    }, status=status)


def resp_exception(e: Exception, code=RET_ERR, status=http_status.HTTP_200_OK):
    if settings.DEBUG:
        message = repr(e)
    else:
        message = str(e)
    return Response({
        "data": None,
        "code": code,
        "errmsg": message
    }, status=status)
