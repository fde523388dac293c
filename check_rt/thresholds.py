"""
Threshold ranges in the format used by Nagios-compatible plugins

    10      alert if value < 0 or > 10
    10:     alert if value < 10
    ~:10    alert if value > 10
    10:20   alert if value < 10 or > 20
    @10:20  alert if 10 <= value <= 20

See https://nagios-plugins.org/doc/guidelines.html#THRESHOLDFORMAT
Nothing here does any I/O, so everything can be tested in isolation.
"""

import re
from collections import namedtuple

from check_rt.enums import Severity


NUMBER_RE = re.compile(r"^[-+]?(\d+(\.\d*)?|\.\d+)$")


class ThresholdParseError(ValueError):
    """
    Raised when a threshold text can not be parsed
    """
    def __init__(self, text, reason):
        super(ThresholdParseError, self).__init__(
            "Invalid threshold '{0}': {1}".format(text, reason))
        self.text = text
        self.reason = reason


class ThresholdSpec(namedtuple("ThresholdSpec", ["lower", "upper", "negate"])):
    """
    Parsed threshold range.  Unset `lower` means negative infinity, unset
    `upper` means positive infinity.  With `negate`, the alerting region is
    the inside of the range instead of the outside.
    """
    __slots__ = ()

    def __str__(self):
        lower = "~" if self.lower is None else _format_number(self.lower)
        upper = "" if self.upper is None else _format_number(self.upper)
        if lower == "0" and upper:
            text = upper
        else:
            text = "{0}:{1}".format(lower, upper)
        return "@" + text if self.negate else text


def _format_number(number):
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    return str(number)


def _parse_number(text, bound):
    if not NUMBER_RE.match(bound):
        raise ThresholdParseError(
            text, "'{0}' is not a number".format(bound))
    try:
        return int(bound)
    except ValueError:
        return float(bound)


def parse(text):
    """
    Parse the threshold `text` into a ThresholdSpec

    :param str text: e.g. "10", "5:", "~:8", "4:18" or "@4:18"
    :raises ThresholdParseError: when the text is not a valid range
    :return: ThresholdSpec
    """
    original = text
    text = (text or "").strip()
    if not text:
        raise ThresholdParseError(original, "empty threshold")

    negate = text.startswith("@")
    if negate:
        text = text[1:]

    if text.count(":") > 1:
        raise ThresholdParseError(original, "too many ':' separators")

    if ":" in text:
        start, end = [part.strip() for part in text.split(":")]
    else:
        start, end = "", text

    if start == "~":
        lower = None
    elif start == "":
        # Lower bound defaults to zero, unless the range is open ("10:")
        lower = 0 if end else None
    else:
        lower = _parse_number(original, start)

    upper = _parse_number(original, end) if end else None

    if lower is None and upper is None:
        raise ThresholdParseError(original, "no bound given")

    if lower is not None and upper is not None and lower > upper:
        raise ThresholdParseError(
            original, "start {0} is greater than end {1}".format(lower, upper))

    return ThresholdSpec(lower=lower, upper=upper, negate=negate)


def evaluate(spec, value):
    """
    Return True when `value` falls into the alerting region of `spec`
    """
    above_lower = spec.lower is None or value >= spec.lower
    below_upper = spec.upper is None or value <= spec.upper
    inside = above_lower and below_upper
    if spec.negate:
        return inside
    return not inside


def classify(value, warning=None, critical=None):
    """
    Classify the measured `value` against the optional warning and critical
    thresholds.  Both can be either ThresholdSpec or a text to be parsed.
    Critical always wins over warning, no matter how far the value is from
    either of the ranges.

    :return: one of the Severity values
    """
    if warning is None and critical is None:
        return Severity.UNKNOWN

    if isinstance(critical, str):
        critical = parse(critical)
    if isinstance(warning, str):
        warning = parse(warning)

    if critical is not None and evaluate(critical, value):
        return Severity.CRITICAL
    if warning is not None and evaluate(warning, value):
        return Severity.WARNING
    return Severity.OK
