from dependency_injector import providers

from swaptrace.config import Settings
from swaptrace.container import Container
from swaptrace.domain.enums import DataProvider, SwapperStrategy
from swaptrace.parser.registry import ParserRegistry
from swaptrace.parser.stages.swapper import LargestDeltaSwapperIdentifier


class TestContainer:
    def test_registry_is_singleton(self):
        container = Container()

        registry = container.registry()
        assert isinstance(registry, ParserRegistry)
        assert container.registry() is registry
        assert container.context() is container.context()

    def test_settings_override_reaches_parsers(self):
        container = Container()
        container.settings.override(
            providers.Object(Settings(_env_file=None, swapper_strategy=SwapperStrategy.LARGEST_DELTA)),
        )

        context = container.context()
        assert context.swapper_strategy == SwapperStrategy.LARGEST_DELTA
        parser = container.registry().get(DataProvider.SHYFT)
        assert isinstance(parser._identifier, LargestDeltaSwapperIdentifier)
