"""ParserRegistry: provider → parser lookup."""

from swaptrace.domain.enums import DataProvider
from swaptrace.parser.generic.balance import BalanceChangeSwapParser
from swaptrace.parser.generic.base import BaseSwapParser
from swaptrace.parser.generic.transfers import TransferSwapParser
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.types import ClassificationResult


class ParserRegistry:
    """Registry mapping data provider → parser.

    Payloads with no declared provider are matched by shape via can_parse, in registration order.
    """

    def __init__(self) -> None:
        self._parsers: dict[DataProvider, BaseSwapParser] = {}

    def register(self, provider: DataProvider | str, parser: BaseSwapParser) -> None:
        self._parsers[DataProvider(provider)] = parser

    def get(self, provider: DataProvider | str) -> BaseSwapParser:
        """Raises KeyError for an unregistered provider, ValueError for an unknown name."""
        return self._parsers[DataProvider(provider)]

    def detect(self, tx_data: dict) -> BaseSwapParser | None:
        for parser in self._parsers.values():
            if parser.can_parse(tx_data):
                return parser
        return None

    def parse(self, tx_data: dict, provider: DataProvider | str | None = None) -> ClassificationResult:
        if provider is not None:
            parser = self.get(provider)
        else:
            parser = self.detect(tx_data)
            if parser is None:
                raise ValueError("No registered parser recognises this payload")
        return parser.parse(tx_data)

    @property
    def providers(self) -> list[DataProvider]:
        return list(self._parsers)


def build_default_registry(context: ClassifierContext) -> ParserRegistry:
    """Create a ParserRegistry with both provider variants registered."""
    registry = ParserRegistry()
    registry.register(DataProvider.SHYFT, BalanceChangeSwapParser(context))
    registry.register(DataProvider.HELIUS, TransferSwapParser(context))
    return registry
