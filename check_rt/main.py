"""
Nagios plugin counting the RT tickets matching a query

    check_rt -f /etc/nagios/rtrc -u https://rt.example.com \\
             -q "Queue='general' AND Status='new'" -w 10 -c 20
"""

import argparse
import logging
import sys
from collections import namedtuple

from check_rt import __version__
from check_rt.client import Client, DEFAULT_TIMEOUT
from check_rt.config import config_from_file, DEFAULT_CONFIG_PATH
from check_rt.enums import Severity
from check_rt.exceptions import RtException, RtConfigException
from check_rt.log import setup_script_logger
from check_rt.thresholds import parse, classify, ThresholdParseError


log = logging.getLogger(__name__)

SHORTNAME = "RT"
DEFAULT_URL = "https://localhost"
DEFAULT_QUERY = "Queue='general'"
DEFAULT_LABEL = "Number of"


CheckOptions = namedtuple("CheckOptions", [
    "warning",
    "critical",
    "config_path",
    "url",
    "query",
    "label",
    "timeout",
])


class PluginArgumentParser(argparse.ArgumentParser):
    """
    Invalid arguments are an UNKNOWN state for Nagios, not exit code 2
    """
    def error(self, message):
        self.print_usage(sys.stderr)
        print(plugin_output(Severity.UNKNOWN, message))
        sys.exit(Severity.UNKNOWN)


def setup_parser():
    parser = PluginArgumentParser(
        prog="check_rt",
        description="Count the RT tickets matching a query and compare the "
                    "number with the warning and critical thresholds.",
        epilog="Thresholds use the Nagios range format, e.g. '10' (alert "
               "above 10), '5:' (alert below 5), '4:18' (alert outside) "
               "or '@4:18' (alert inside).",
    )
    parser.add_argument("-w", "--warning", metavar="SPEC",
                        help="Warning threshold")
    parser.add_argument("-c", "--critical", metavar="SPEC",
                        help="Critical threshold")
    parser.add_argument("-f", "--file", dest="config_path",
                        default=DEFAULT_CONFIG_PATH, metavar="PATH",
                        help="File with RT credentials, default: %(default)s")
    parser.add_argument("-u", "--url", default=None,
                        help="RT server URL, default: `server` from the "
                             "credentials file or {0}".format(DEFAULT_URL))
    parser.add_argument("-q", "--query", default=DEFAULT_QUERY, metavar="SQL",
                        help="TicketSQL query, default: %(default)s")
    parser.add_argument("-l", "--label", default=DEFAULT_LABEL,
                        help="Label of the status message, "
                             "default: %(default)s")
    parser.add_argument("-t", "--timeout", type=int, default=DEFAULT_TIMEOUT,
                        help="Connection timeout in seconds, "
                             "default: %(default)s")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Print more information to stderr, "
                             "can be repeated")
    parser.add_argument("-V", "--version", action="version",
                        version="%(prog)s {0}".format(__version__))
    return parser


def options_from_args(args):
    """
    Validate the parsed arguments and turn them into CheckOptions.  Nothing
    is read from disk or network yet.
    """
    if args.warning is None and args.critical is None:
        raise RtConfigException(
            "At least one of --warning or --critical is required")

    if args.timeout <= 0:
        raise RtConfigException("Timeout must be a positive number of seconds")

    return CheckOptions(
        warning=parse(args.warning) if args.warning is not None else None,
        critical=parse(args.critical) if args.critical is not None else None,
        config_path=args.config_path,
        url=args.url,
        query=args.query,
        label=args.label,
        timeout=args.timeout,
    )


def perfdata(count, options):
    warning = "" if options.warning is None else str(options.warning)
    critical = "" if options.critical is None else str(options.critical)
    return "tickets={0};{1};{2};0;".format(count, warning, critical)


def run_check(options):
    """
    Read the credentials, count the tickets and classify the result

    :param CheckOptions options:
    :return: tuple (Severity value, message)
    """
    config = config_from_file(options.config_path)
    client_config = {
        "server_url": options.url or config["server"] or DEFAULT_URL,
        "user": config["user"],
        "password": config["password"],
        "timeout": options.timeout,
    }

    with Client(client_config) as client:
        count = client.count_tickets(options.query)

    severity = classify(count, options.warning, options.critical)
    log.info("%s tickets, warning %s, critical %s => %s", count,
             options.warning, options.critical, Severity(severity))

    message = "{0} matching tickets was {1} | {2}".format(
        options.label, count, perfdata(count, options))
    return severity, message


def plugin_output(severity, message):
    return "{0} {1} - {2}".format(SHORTNAME, Severity(severity), message)


def main(argv=None):
    parser = setup_parser()
    args = parser.parse_args(argv)
    setup_script_logger(logging.getLogger("check_rt"), args.verbose)

    try:
        options = options_from_args(args)
        severity, message = run_check(options)
    except KeyboardInterrupt:
        severity, message = Severity.UNKNOWN, "Interrupted by user"
    except (RtException, ThresholdParseError) as ex:
        severity, message = Severity.UNKNOWN, str(ex)
    except Exception as ex:  # pylint: disable=broad-except
        # An uncaught traceback exits 1, which Nagios reads as WARNING
        log.debug("Unexpected error", exc_info=True)
        severity, message = Severity.UNKNOWN, "Unexpected error: {0}".format(ex)

    print(plugin_output(severity, message))
    sys.exit(severity)


if __name__ == "__main__":
    main()
