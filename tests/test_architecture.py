"""Architectural boundary tests using pytest-archon.

These tests verify that the codebase follows clean architecture principles:
- Domain layer has no dependencies on adapters
- Application services don't depend on adapters
- Adapters can depend on domain
- No circular dependencies
"""

from pytest_archon import archrule


def test_domain_models_have_no_dependencies() -> None:
    """Domain models should not import anything but the standard library and the domain."""
    (
        archrule("domain models", comment="Domain models should be independent")
        .match("transit_departures.domain.models*")
        .should_not_import("transit_departures.adapters*")
        .should_not_import("transit_departures.application*")
        .should_not_import("transit_departures.domain.contracts*")
        .should_not_import("transit_departures.domain.ports*")
        .may_import("transit_departures.domain.models*")
        .check("transit_departures")
    )


def test_domain_contracts_have_no_dependencies() -> None:
    """Domain contracts (protocols/interfaces) should not import adapters or application."""
    (
        archrule("domain contracts", comment="Domain contracts should be independent")
        .match("transit_departures.domain.contracts*")
        .should_not_import("transit_departures.adapters*")
        .should_not_import("transit_departures.application*")
        .may_import("transit_departures.domain.contracts*")
        .may_import("transit_departures.domain.models*")
        .may_import("transit_departures.domain.ports*")
        .check("transit_departures")
    )


def test_domain_ports_have_no_dependencies() -> None:
    """Domain ports (interfaces) should not import adapters or application."""
    (
        archrule("domain ports", comment="Domain ports should be independent")
        .match("transit_departures.domain.ports*")
        .should_not_import("transit_departures.adapters*")
        .should_not_import("transit_departures.application*")
        .may_import("transit_departures.domain.ports*")
        .may_import("transit_departures.domain.models*")
        .may_import("transit_departures.domain.contracts*")
        .check("transit_departures")
    )


def test_application_services_dont_import_adapters() -> None:
    """Application services should not depend on adapters (infrastructure layer)."""
    (
        archrule(
            "application services", comment="Application services should not depend on adapters"
        )
        .match("transit_departures.application*")
        .should_not_import("transit_departures.adapters*")
        .may_import("transit_departures.domain*")
        .may_import("transit_departures.application*")
        .check("transit_departures")
    )


def test_adapters_dont_import_application() -> None:
    """Adapters should not import application services (to avoid cycles)."""
    (
        archrule(
            "adapters independence", comment="Adapters should not depend on application services"
        )
        .match("transit_departures.adapters*")
        .should_not_import("transit_departures.application*")
        .should_not_import("transit_departures.cli")
        .may_import("transit_departures.domain*")
        .may_import("transit_departures.adapters*")
        .check("transit_departures", only_direct_imports=True)
    )


def test_no_circular_dependencies_in_domain() -> None:
    """Domain layer should not have circular dependencies."""
    (
        archrule("domain no cycles", comment="Domain layer should not have circular dependencies")
        .match("transit_departures.domain*")
        .should_not_import("transit_departures.adapters*")
        .should_not_import("transit_departures.application*")
        .may_import("transit_departures.domain*")
        .check("transit_departures", only_direct_imports=True)
    )


def test_parsers_dont_perform_io() -> None:
    """Response parsers should stay pure and not reach for the HTTP layer or config."""
    (
        archrule("pure parsers", comment="Parsers should not depend on transport or config")
        .match("transit_departures.adapters.transit_api.*_parser")
        .should_not_import("transit_departures.adapters.transit_api.http_client")
        .should_not_import("transit_departures.adapters.transit_api.transit_client")
        .should_not_import("transit_departures.adapters.config*")
        .may_import("transit_departures.domain*")
        .may_import("transit_departures.adapters.transit_api*")
        .check("transit_departures", only_direct_imports=True)
    )


def test_config_doesnt_import_transit_client() -> None:
    """Configuration should not depend on the HTTP client."""
    (
        archrule("config independence", comment="Config should not depend on the HTTP client")
        .match("transit_departures.adapters.config*")
        .should_not_import("transit_departures.adapters.transit_api.transit_client")
        .should_not_import("transit_departures.adapters.transit_api.http_client")
        .check("transit_departures", only_direct_imports=True)
    )
