import os
import re
import logging

import requests
from munch import Munch

from .exceptions import RtRequestException, RtAuthException


GET = "GET"
POST = "POST"

log = logging.getLogger(__name__)

# Every RT REST 1.0 response starts with e.g. "RT/4.4.3 200 Ok"
STATUS_LINE_RE = re.compile(
    r"^RT/(?P<version>\S+)\s+(?P<code>\d{3})\s*(?P<reason>.*)$")


class Request(object):
    """
    Send requests to the RT REST 1.0 API within one HTTP session, so the
    RT_SID cookie obtained by login is used for the following requests
    """

    def __init__(self, api_base_url=None, timeout=None, session=None):
        """
        :param api_base_url: e.g. https://rt.example.com/REST/1.0/
        :param timeout: connection timeout in seconds
        :param session: requests.Session to use, a new one by default
        """
        self.api_base_url = api_base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def endpoint_url(self, endpoint):
        endpoint = endpoint.strip("/")
        return os.path.join(self.api_base_url, endpoint)

    def send(self, endpoint, method=GET, data=None, params=None):
        request_params = self._request_params(endpoint, method, data, params)
        log.debug("%s %s", request_params["method"], request_params["url"])

        try:
            response = self.session.request(**request_params)
        except requests.exceptions.Timeout:
            raise RtRequestException(
                "Connection to {0} timed out after {1}s."
                .format(self.api_base_url, self.timeout))
        except requests.exceptions.RequestException as ex:
            raise RtRequestException(
                "Unable to connect to {0}: {1}".format(self.api_base_url, ex))

        return handle_errors(response)

    def _request_params(self, endpoint, method=GET, data=None, params=None):
        return {
            "url": self.endpoint_url(endpoint),
            "data": data,
            "method": method.upper(),
            "params": params,
            "timeout": self.timeout,
        }

    def close(self):
        self.session.close()


def parse_response(response):
    """
    Split the RT response body into the status line and the payload.

    :return: Munch with version, code, reason and payload (list of lines)
    """
    lines = response.text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)

    match = STATUS_LINE_RE.match(lines[0].strip()) if lines else None
    if not match:
        raise RtRequestException(
            "Response from {0} is not an RT REST response, is the URL correct?"
            .format(response.url), response=response)

    payload = [line for line in lines[1:] if line.strip()]
    return Munch(
        version=match.group("version"),
        code=int(match.group("code")),
        reason=match.group("reason").strip(),
        payload=payload,
        __response__=response,
    )


def handle_errors(response):
    if response.status_code in [401, 403]:
        raise RtAuthException(
            "Authentication failed: {0} {1}".format(response.status_code,
                                                    response.reason),
            response=response)

    if not response.ok:
        raise RtRequestException(
            "Request to {0} failed: {1} {2}".format(
                response.url, response.status_code, response.reason),
            response=response)

    result = parse_response(response)
    log.debug("RT/%s replied %s %s", result.version, result.code, result.reason)

    if result.code == 401:
        raise RtAuthException(
            "Authentication failed: {0}".format(result.reason),
            response=response)

    if result.code != 200:
        message = "RT error {0} {1}".format(result.code, result.reason)
        if result.payload:
            message += "\n" + "\n".join(result.payload)
        raise RtRequestException(message, response=response)

    return result
