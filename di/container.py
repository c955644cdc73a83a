from __future__ import annotations

from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource
from llm.gateway import ProviderGateway


class InfrastructureContainer(containers.DeclarativeContainer):
    settings = providers.Object(SETTINGS)

    # Database; the engine is created lazily by DatabaseResource.init()
    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    # One gateway per process so the SDK client (and its pool) is shared
    provider_gateway = providers.Singleton(
        ProviderGateway.from_settings,
        settings=infrastructure.settings,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()
    infrastructure = providers.DependenciesContainer()

    chat_controller = providers.Factory(
        "api.features.chat.controller.ChatController",
        gateway=services.provider_gateway,
        history_limit=infrastructure.settings.provided.LLM.LLM_HISTORY_LIMIT,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.main",
            "api.shared.db",
            "api.features.chat.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(
        ControllerContainer, services=services, infrastructure=infrastructure
    )
