"""
Reading the RT credentials file

The file uses the rtrc format of RT's own command line client, e.g.

    server https://rt.example.com
    user nagios
    passwd secret

`pass` is accepted as well as `passwd`, and `key = value` works too.
"""

import os
import logging
import configparser

from check_rt.exceptions import RtConfigException


log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/etc/nagios/rtrc"

# rtrc files don't have any section, configparser needs one
SECTION = "rtrc"


def _check_file(path):
    if not os.path.exists(path):
        raise RtConfigException("File {0} is missing.".format(path))
    if not os.path.isfile(path):
        raise RtConfigException("File {0} is not a regular file.".format(path))
    if not os.access(path, os.R_OK):
        raise RtConfigException("File {0} is not readable.".format(path))
    if not os.path.getsize(path):
        raise RtConfigException("File {0} is empty.".format(path))


def config_from_file(path=None):
    """
    Read the credentials from `path`, fail before any network traffic
    happens if it is not possible.

    :param str path: defaults to /etc/nagios/rtrc
    :return: dict with `user`, `password` and `server` (may be None)
    """
    path = os.path.expanduser(path or DEFAULT_CONFIG_PATH)
    _check_file(path)

    raw_config = configparser.ConfigParser(
        delimiters=("=", " ", "\t"),
        interpolation=None,
    )
    try:
        with open(path, "r") as fd:
            raw_config.read_string("[{0}]\n".format(SECTION) + fd.read(),
                                   source=path)
    except (OSError, UnicodeDecodeError) as ex:
        raise RtConfigException("Can not read {0}: {1}".format(path, ex))
    except configparser.Error as ex:
        raise RtConfigException("Bad configuration file: {0}".format(ex))

    section = raw_config[SECTION]
    config = {
        "user": section.get("user"),
        "password": section.get("pass") or section.get("passwd"),
        "server": section.get("server"),
    }

    for field, key in [("user", "user"), ("password", "pass")]:
        if not config[field]:
            raise RtConfigException(
                "Bad configuration file {0}: `{1}` is not set".format(path, key))

    log.debug("Credentials for user %s loaded from %s", config["user"], path)
    return config
