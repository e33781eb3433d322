"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from camelcase_lint.infrastructure.di.container import NamingLintContainer
from camelcase_lint.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = NamingLintContainer()

    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        registry=container.get_lint_registry(),
        filesystem=container.get_filesystem_gateway(),
        source_map=container.get_source_map(),
        front_ends=container.get_front_ends(),
        rule=container.get_naming_rule(),
    )

    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
