"""
Logging setup for the check_rt plugin
"""

import logging


def setup_script_logger(log, verbosity=0):
    """
    The plugin entry point should simply do:

        log = logging.getLogger("check_rt")
        setup_script_logger(log, args.verbose)

    Nagios reads the status line from stdout, so all the logging goes to
    stderr.  Nothing but warnings is printed unless `verbosity` is set.
    """

    if verbosity >= 2:
        level = logging.DEBUG
        log_format = "[%(asctime)s][%(levelname)6s]: %(message)s"
    elif verbosity == 1:
        level = logging.INFO
        log_format = "%(message)s"
    else:
        level = logging.WARNING
        log_format = "%(message)s"

    log.setLevel(level)

    # Drop the default handler, we will create it ourselves
    log.handlers = []

    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(log_format))
    log.addHandler(stream)

    return log
