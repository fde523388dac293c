from unittest import mock
from pytest import fixture

import responses


RT_URL = "https://rt.example.com"
API_URL = RT_URL + "/REST/1.0/"
SEARCH_URL = API_URL + "search/ticket"
LOGOUT_URL = API_URL + "logout"

RTRC = """\
# credentials for the nagios checks
server {0}
user nagios
passwd s3cr3t
""".format(RT_URL)


def rt_body(payload="", code=200, reason="Ok"):
    """
    Response body as RT REST 1.0 sends it
    """
    return "RT/4.4.3 {0} {1}\n\n{2}\n".format(code, reason, payload)


def tickets_body(*ids):
    if not ids:
        return rt_body("No matching results.")
    return rt_body("\n".join("ticket/{0}".format(i) for i in ids))


LOGIN_OK = rt_body()
LOGIN_FAILED = rt_body(code=401, reason="Credentials required")


def add_rt_responses(search_body, login_body=LOGIN_OK):
    """
    Fake RT server answering the login, one search and the logout
    """
    responses.add(responses.POST, API_URL, body=login_body)
    responses.add(responses.GET, SEARCH_URL, body=search_body)
    responses.add(responses.POST, LOGOUT_URL, body=rt_body("Connection closed"))


config = {
    "server_url": RT_URL,
    "user": "nagios",
    "password": "s3cr3t",
    "timeout": 5,
}


@fixture
def f_rtrc(tmp_path):
    path = tmp_path / "rtrc"
    path.write_text(RTRC)
    yield str(path)

