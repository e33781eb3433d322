from typing import TYPE_CHECKING, Any, Optional

from camelcase_lint.domain.case_converter import CaseConverter
from camelcase_lint.domain.config import ConfigurationLoader
from camelcase_lint.domain.rules.camel_case_types import NonCamelCaseTypesRule
from camelcase_lint.infrastructure.config_file_loader import ConfigFileLoader
from camelcase_lint.infrastructure.gateways.astroid_gateway import AstroidGateway
from camelcase_lint.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from camelcase_lint.infrastructure.gateways.rust_source_gateway import RustSourceGateway
from camelcase_lint.infrastructure.gateways.source_map import SourceMap
from camelcase_lint.infrastructure.services.lint_registry import LintRegistryService
from camelcase_lint.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from camelcase_lint.domain.protocols import (
        DeclarationSourceProtocol,
        FileSystemProtocol,
        TelemetryPort,
    )


class NamingLintContainer:
    """Dependency Injection Container for the naming lint."""

    _instance: Optional["NamingLintContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        config_dict, source_path = ConfigFileLoader.load_config_from_fs()
        config_loader = ConfigurationLoader(config_dict, source_path)
        self.register_singleton("ConfigurationLoader", config_loader)

        self.register_singleton(
            "TelemetryPort", ProjectTelemetry("CAMELCASE-LINT", "cyan", "Naming lint ready")
        )
        self.register_singleton("LintRegistryService", LintRegistryService())
        self.register_singleton("FileSystemGateway", FileSystemGateway())
        self.register_singleton("SourceMap", SourceMap())
        self.register_singleton("AstroidGateway", AstroidGateway())
        self.register_singleton("RustSourceGateway", RustSourceGateway())

        converter = CaseConverter(config_loader.case_policy)
        self.register_singleton("CaseConverter", converter)
        self.register_singleton(
            "NamingRule",
            NonCamelCaseTypesRule(converter, exempt_repr_c=config_loader.exempt_repr_c),
        )

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return self.get("ConfigurationLoader")  # type: ignore[no-any-return]

    def get_telemetry_port(self) -> "TelemetryPort":
        return self.get("TelemetryPort")  # type: ignore[no-any-return]

    def get_lint_registry(self) -> LintRegistryService:
        return self.get("LintRegistryService")  # type: ignore[no-any-return]

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return self.get("FileSystemGateway")  # type: ignore[no-any-return]

    def get_source_map(self) -> SourceMap:
        return self.get("SourceMap")  # type: ignore[no-any-return]

    def get_front_ends(self) -> list["DeclarationSourceProtocol"]:
        return [self.get("RustSourceGateway"), self.get("AstroidGateway")]

    def get_naming_rule(self) -> NonCamelCaseTypesRule:
        return self.get("NamingRule")  # type: ignore[no-any-return]

    @classmethod
    def get_instance(cls) -> "NamingLintContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = NamingLintContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
