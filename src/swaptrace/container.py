from dependency_injector import containers, providers

from swaptrace.config import Settings
from swaptrace.parser.registry import build_default_registry
from swaptrace.parser.utils.context import build_classifier_context


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    context = providers.Singleton(
        build_classifier_context,
        settings=settings,
    )

    registry = providers.Singleton(
        build_default_registry,
        context=context,
    )
