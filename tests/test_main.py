import argparse

import pytest
import responses

from check_rt import main
from check_rt.enums import Severity
from check_rt.exceptions import RtConfigException
from check_rt.thresholds import ThresholdParseError, parse
from rt_tests_lib import (
    LOGIN_FAILED,
    RT_URL,
    add_rt_responses,
    f_rtrc,  # pylint: disable=unused-import
    mock,
    tickets_body,
)


def exit_wrap(value):
    if type(value) == int:
        return value
    else:
        return value.code


def run_main(argv, capsys):
    with pytest.raises(SystemExit) as err:
        main.main(argv=argv)
    stdout, stderr = capsys.readouterr()
    return exit_wrap(err.value), stdout, stderr


@pytest.mark.parametrize("count,code,state", [
    (5, 0, "OK"),
    (12, 1, "WARNING"),
    (20, 2, "CRITICAL"),
])
@responses.activate
def test_severities(count, code, state, f_rtrc, capsys):
    add_rt_responses(tickets_body(*range(count)))
    status, stdout, _ = run_main(["-f", f_rtrc, "-w", "10", "-c", "18"], capsys)
    assert status == code
    assert stdout == (
        "RT {0} - Number of matching tickets was {1} "
        "| tickets={1};10;18;0;\n".format(state, count))


@responses.activate
def test_single_line_output(f_rtrc, capsys):
    add_rt_responses(tickets_body())
    status, stdout, stderr = run_main(["-f", f_rtrc, "-c", "@0:0", "-vv"], capsys)
    assert status == Severity.CRITICAL
    assert stdout == \
        "RT CRITICAL - Number of matching tickets was 0 | tickets=0;;@0;0;\n"
    # debug logs don't go to stdout
    assert "Logging in to" in stderr
    assert "s3cr3t" not in stderr


@responses.activate
def test_label_and_query(f_rtrc, capsys):
    add_rt_responses(tickets_body(1, 2))
    status, stdout, _ = run_main([
        "--file", f_rtrc, "--warning", "1", "--label", "New",
        "--query", "Queue='support' AND Status='new'",
    ], capsys)
    assert status == Severity.WARNING
    assert stdout.startswith("RT WARNING - New matching tickets was 2 |")
    assert "support" in responses.calls[1].request.url


@responses.activate
def test_url_option_overrides_file(f_rtrc, capsys):
    other = "https://other.example.com/REST/1.0/"
    responses.add(responses.POST, other, body=LOGIN_FAILED)
    status, stdout, _ = run_main(
        ["-f", f_rtrc, "-w", "1", "-u", "https://other.example.com"], capsys)
    assert status == Severity.UNKNOWN
    assert stdout.startswith("RT UNKNOWN - Login as nagios failed")
    assert responses.calls[0].request.url == other


@responses.activate
def test_default_url(tmp_path, capsys):
    rtrc = tmp_path / "rtrc"
    rtrc.write_text("user nagios\npass s3cr3t\n")
    responses.add(responses.POST, "https://localhost/REST/1.0/",
                  body=LOGIN_FAILED)
    status, _, _ = run_main(["-f", str(rtrc), "-w", "1"], capsys)
    assert status == Severity.UNKNOWN
    assert responses.calls[0].request.url == "https://localhost/REST/1.0/"


def test_no_threshold(f_rtrc, capsys):
    status, stdout, _ = run_main(["-f", f_rtrc], capsys)
    assert status == Severity.UNKNOWN
    assert stdout == ("RT UNKNOWN - At least one of --warning or --critical "
                      "is required\n")


@mock.patch("check_rt.main.config_from_file")
def test_invalid_threshold(config_from_file, capsys):
    status, stdout, _ = run_main(["-w", "18:4"], capsys)
    assert status == Severity.UNKNOWN
    assert "Invalid threshold '18:4'" in stdout
    # thresholds are checked before reading the credentials
    config_from_file.assert_not_called()


@mock.patch("check_rt.main.Client")
def test_missing_config(client, tmp_path, capsys):
    path = str(tmp_path / "rtrc")
    status, stdout, _ = run_main(["-f", path, "-w", "10"], capsys)
    assert status == Severity.UNKNOWN
    assert stdout == "RT UNKNOWN - File {0} is missing.\n".format(path)
    client.assert_not_called()


@responses.activate
def test_network_error(f_rtrc, capsys):
    # nothing registered, responses refuses the connection
    status, stdout, _ = run_main(["-f", f_rtrc, "-w", "10"], capsys)
    assert status == Severity.UNKNOWN
    assert stdout.startswith(
        "RT UNKNOWN - Unable to connect to {0}/REST/1.0/".format(RT_URL))


@mock.patch("check_rt.main.run_check")
def test_keyboard_interrupt(run_check, capsys):
    run_check.side_effect = KeyboardInterrupt()
    status, stdout, _ = run_main(["-w", "10"], capsys)
    assert status == Severity.UNKNOWN
    assert stdout == "RT UNKNOWN - Interrupted by user\n"


@mock.patch("check_rt.main.run_check")
def test_unexpected_error(run_check, capsys):
    run_check.side_effect = ZeroDivisionError("division by zero")
    status, stdout, _ = run_main(["-w", "10"], capsys)
    assert status == Severity.UNKNOWN
    assert stdout == "RT UNKNOWN - Unexpected error: division by zero\n"


def test_bad_arguments(capsys):
    status, stdout, stderr = run_main(["-w", "10", "--no-such-option"], capsys)
    assert status == Severity.UNKNOWN
    assert stdout.startswith("RT UNKNOWN - unrecognized arguments")
    assert "usage: check_rt" in stderr


def test_version(capsys):
    status, stdout, _ = run_main(["--version"], capsys)
    assert status == 0
    assert stdout.startswith("check_rt ")


class TestOptions:
    @staticmethod
    def parse_args(argv):
        return main.setup_parser().parse_args(argv)

    def test_defaults(self):
        options = main.options_from_args(self.parse_args(["-w", "10"]))
        assert options == main.CheckOptions(
            warning=parse("10"),
            critical=None,
            config_path="/etc/nagios/rtrc",
            url=None,
            query="Queue='general'",
            label="Number of",
            timeout=15,
        )

    def test_verbose_count(self):
        assert self.parse_args(["-vvv"]).verbose == 3
        assert self.parse_args([]).verbose == 0

    def test_invalid_timeout(self):
        with pytest.raises(RtConfigException):
            main.options_from_args(self.parse_args(["-w", "1", "-t", "0"]))

    def test_invalid_critical(self):
        with pytest.raises(ThresholdParseError):
            main.options_from_args(self.parse_args(["-c", "abc"]))

    def test_parser(self):
        assert isinstance(main.setup_parser(), argparse.ArgumentParser)


def test_perfdata():
    options = main.CheckOptions(parse("~:10"), None, None, None, None, None, 1)
    assert main.perfdata(3, options) == "tickets=3;~:10;;0;"
