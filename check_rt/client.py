import logging

from check_rt.auth import RtAuth
from check_rt.exceptions import RtQueryException
from check_rt.requests import Request, GET


log = logging.getLogger(__name__)

NO_RESULTS = "No matching results."

DEFAULT_TIMEOUT = 15


class Client(object):
    """
    Minimal RT REST 1.0 client, it only knows how to search for tickets.

        with Client(config) as client:
            count = client.count_tickets("Queue='general' AND Status='new'")
    """

    def __init__(self, config):
        """
        :param dict config: server_url, user, password and optionally timeout
        """
        self.config = config
        self.request = Request(
            api_base_url=self.api_base_url,
            timeout=config.get("timeout", DEFAULT_TIMEOUT),
        )
        self.auth = RtAuth(config, self.request)

    @property
    def api_base_url(self):
        return "{0}/REST/1.0/".format(self.config["server_url"].rstrip("/"))

    def search(self, query):
        """
        Search for tickets matching the TicketSQL `query`

        :param str query: passed to RT as it is
        :return: list of ticket IDs (as strings)
        """
        self.auth.make()
        params = {"query": query, "format": "i"}
        result = self.request.send(endpoint="search/ticket", method=GET,
                                   params=params)

        tickets = []
        for line in result.payload:
            line = line.strip()
            if line == NO_RESULTS:
                continue
            if not line.startswith("ticket/"):
                raise RtQueryException(
                    "Query \"{0}\" failed: {1}".format(
                        query, "\n".join(result.payload)),
                    response=result.__response__)
            tickets.append(line[len("ticket/"):])

        log.debug("Query \"%s\" matched %s tickets", query, len(tickets))
        return tickets

    def count_tickets(self, query):
        """
        Return the number of tickets matching `query`
        """
        return len(self.search(query))

    def close(self):
        self.auth.logout()
        self.request.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
