"""
Interpretation of Web API responses.

A status outside 2xx is always a BadStatusError and the body is left
unparsed. Otherwise the body is decoded as JSON into one record or a list
of records. Unknown fields are tolerated, missing required ones are not.
"""

import json
from typing import Any, Callable, List, TypeVar, Union

import requests

from .exceptions import BadStatusError, DecodeError


T = TypeVar("T")


def check_status(response: requests.Response) -> requests.Response:
    if not 200 <= response.status_code < 300:
        raise BadStatusError(response.status_code, response.url or None)
    return response


def decode_json(response: requests.Response) -> Any:
    check_status(response)
    raw = response.content
    try:
        return json.loads(raw)
    except ValueError as e:
        raise DecodeError(raw, e) from e


def decode(response: requests.Response, model: Callable[[Any], T], many: bool = False) -> Union[T, List[T]]:
    """
    Decode a response into `model` records.

    Args:
        response: Response returned by the session
        model: Callable building one record from a JSON object, e.g. Torrent.from_dict
        many: Expect a JSON array and return a list in the service's order

    Raises:
        BadStatusError: Status outside 2xx
        DecodeError: Malformed JSON, wrong shape or missing required fields
    """
    data = decode_json(response)
    raw = response.content

    if many and not isinstance(data, list):
        raise DecodeError(raw, TypeError(f"Expected a JSON array, got {type(data).__name__}"))
    if not many and not isinstance(data, dict):
        raise DecodeError(raw, TypeError(f"Expected a JSON object, got {type(data).__name__}"))

    try:
        if many:
            return [model(item) for item in data]
        return model(data)
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(raw, e) from e


def decode_text(response: requests.Response) -> str:
    """Return the body as text after the status check, for callers wanting unprocessed JSON."""
    return check_status(response).text
