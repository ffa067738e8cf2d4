"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Resolves the gateway lazily, builds services with the
confirmation policy, and centralizes result emission (stdout/stderr
routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import click

from tcmctl.domain.errors import CoreServiceConnectionError
from tcmctl.output.formatters import OutputSettings, format_result
from tcmctl.services.result import ServiceResult

if TYPE_CHECKING:
    from tcmctl.config.settings import TcmSettings
    from tcmctl.infrastructure.gateway import CoreServiceGateway
    from tcmctl.services.base import BaseService

S = TypeVar("S", bound="BaseService")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The gateway is created on first use so ``--help``, ``--version`` and
    local-only commands never touch a plugin or the sandbox.
    """

    def __init__(self, settings: TcmSettings) -> None:
        self.settings = settings
        self._gateway: CoreServiceGateway | None = None

        from tcmctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

        if settings.verbose:
            from tcmctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def gateway(self) -> CoreServiceGateway:
        """The configured gateway (resolved through plugins on first access)."""
        if self._gateway is None:
            from tcmctl.plugins.manager import PluginManager

            plugins = PluginManager()
            plugins.discover_and_load()
            self._gateway = plugins.create_gateway(self.settings)
        return self._gateway

    def service(self, service_cls: type[S], *, remote: bool = True) -> S:
        """Build *service_cls* with the gateway, version config, and confirm policy.

        With ``remote=False`` no gateway is resolved; the service may only
        perform local work.
        """
        gateway = None
        if remote:
            try:
                gateway = self.gateway
            except CoreServiceConnectionError as exc:
                self.emit(ServiceResult.failure("connect", exc))
        return service_cls(gateway, self.settings.core_service, confirm=self.confirm)

    def confirm(self, action: str) -> bool:
        """Confirmation policy: ``--yes`` allows, ``--no-interact`` declines, else prompt."""
        if self.settings.assume_yes:
            return True
        if self.settings.no_interact:
            return False
        return click.confirm(f"{action}?", default=False, err=True)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Issues and warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)

        # In JSON mode, issues and warnings are already in the payload.
        if not settings.json_output:
            for issue in result.issues:
                click.echo(f"ERROR [{issue.code}]: {issue.message}", err=True)
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

        if not result.ok:
            raise SystemExit(1)
