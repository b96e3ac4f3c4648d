from reporters.base import SLACK_TIMESTAMP_OUTPUT, OutputReporter
from reporters.console import ConsoleReporter
from reporters.github_output import GithubOutputReporter

__all__ = ["SLACK_TIMESTAMP_OUTPUT", "OutputReporter", "ConsoleReporter", "GithubOutputReporter"]
