from munch import Munch


class RtException(Exception):
    """
    Base check_rt exception
    """
    def __init__(self, msg=None, response=None):
        super(RtException, self).__init__(msg)
        msg = msg or "Unspecified error"
        self.result = Munch(error=msg, __response__=response)


class RtConfigException(RtException):
    """
    Raised when the credentials file is missing, unreadable or incomplete
    """
    pass


class RtRequestException(RtException):
    """
    Raised when the request to RT doesn't proceed successfully
    """
    def __str__(self):
        errors = self.result.error.strip().split("\n")
        if len(errors) == 1:
            return str(errors[0])

        # RT sometimes explains the failure on several lines
        return "; ".join(error.strip() for error in errors if error.strip())


class RtAuthException(RtRequestException):
    """
    RT refused the credentials
    """
    pass


class RtQueryException(RtRequestException):
    """
    RT refused to run the ticket query, e.g. because of invalid TicketSQL
    """
    pass
