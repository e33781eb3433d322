"""ProjectTelemetry: status lines on stderr plus a logging trail."""

import logging

from rich.console import Console

from camelcase_lint.domain.protocols import TelemetryPort


class ProjectTelemetry(TelemetryPort):
    """
    Telemetry for CLI runs.

    Status output goes to stderr so that diagnostics on stdout stay
    machine-readable. `step` and `debug` are only shown when verbose.
    """

    def __init__(self, project_name: str, color: str, welcome_message: str, verbose: bool = False) -> None:
        self.project_name = project_name
        self.color = color
        self.welcome_message = welcome_message
        self.verbose = verbose
        self.console = Console(stderr=True, highlight=False)
        self.logger = logging.getLogger(project_name.lower())

    def handshake(self) -> None:
        self.logger.info(self.welcome_message)
        if self.verbose:
            self.console.print(f"[bold {self.color}]{self.project_name}[/] {self.welcome_message}")

    def step(self, message: str) -> None:
        self.logger.info(message)
        if self.verbose:
            self.console.print(f"[{self.color}]>[/] {message}")

    def warning(self, message: str) -> None:
        self.logger.warning(message)
        self.console.print(f"[yellow]warning:[/] {message}")

    def error(self, message: str) -> None:
        self.logger.error(message)
        self.console.print(f"[bold red]error:[/] {message}")

    def debug(self, message: str) -> None:
        self.logger.debug(message)
        if self.verbose:
            self.console.print(f"[dim]{message}[/]")
