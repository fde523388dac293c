"""
Authentication against the RT REST 1.0 API
"""

import logging

from check_rt.exceptions import RtAuthException, RtRequestException
from check_rt.requests import POST


log = logging.getLogger(__name__)


class RtAuth(object):
    """
    RT REST 1.0 login with user and password.  RT replies with an RT_SID
    session cookie which is stored in the request session and sent with
    all the following requests.
    """

    def __init__(self, config, request):
        self.config = config
        self.request = request
        self.username = None

    @property
    def logged_in(self):
        return bool(self.username)

    def make(self, reauth=False):
        """
        Log in, unless we already did.  With `reauth=True` the login is
        done again from scratch.
        """
        if self.logged_in and not reauth:
            return
        self.make_expensive()

    def make_expensive(self):
        user = self.config["user"]
        log.info("Logging in to %s as %s", self.request.api_base_url, user)
        data = {"user": user, "pass": self.config["password"]}
        try:
            self.request.send(endpoint="", method=POST, data=data)
        except RtAuthException as ex:
            raise RtAuthException(
                "Login as {0} failed: {1}".format(user, ex),
                response=ex.result.__response__)
        self.username = user

    def logout(self):
        """
        Invalidate the RT session.  This is a best effort, we don't care if
        it fails because we already have what we need.
        """
        if not self.logged_in:
            return
        try:
            self.request.send(endpoint="logout", method=POST)
        except RtRequestException as ex:
            log.debug("Logout failed: %s", ex)
        self.username = None
