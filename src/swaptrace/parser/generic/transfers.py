"""TransferSwapParser: swap classification from itemized transfers (Helius enhanced payloads)."""

import logging

from swaptrace.domain.enums import DataProvider
from swaptrace.parser.generic.base import BaseSwapParser
from swaptrace.parser.stages.deltas import TransferDeltaCollector
from swaptrace.parser.utils.context import ClassifierContext
from swaptrace.parser.utils.helius_transfers import extract_transfer_transaction
from swaptrace.parser.utils.types import BalanceChange, ClassificationResult, TransferTransaction

logger = logging.getLogger(__name__)


def transfer_owner_changes(tx: TransferTransaction) -> list[BalanceChange]:
    """Account-level changes plus a signed per-owner view of every itemized transfer.

    Identification needs to see who moved what; transfers with no account-level echo would
    otherwise be invisible to it.
    """
    changes = list(tx.balance_changes)
    for transfer in tx.transfers:
        if not transfer.is_well_formed or transfer.amount == 0:
            continue
        decimals = transfer.decimals if transfer.decimals is not None else 0
        if transfer.from_owner:
            changes.append(BalanceChange(
                mint=transfer.mint, owner=transfer.from_owner, amount=-transfer.amount, decimals=decimals,
            ))
        if transfer.to_owner:
            changes.append(BalanceChange(
                mint=transfer.mint, owner=transfer.to_owner, amount=transfer.amount, decimals=decimals,
            ))
    return changes


class TransferSwapParser(BaseSwapParser):
    PARSER_NAME = "TransferSwapParser"
    PROVIDER = DataProvider.HELIUS

    def __init__(self, context: ClassifierContext) -> None:
        super().__init__(context)
        self._collector = TransferDeltaCollector(context)

    def can_parse(self, tx_data: dict) -> bool:
        return "tokenTransfers" in tx_data or "accountData" in tx_data

    def parse(self, tx_data: dict) -> ClassificationResult:
        tx = extract_transfer_transaction(tx_data)
        return self.classify(tx, has_records=self.can_parse(tx_data))

    def classify(self, tx: TransferTransaction, has_records: bool = True) -> ClassificationResult:
        erase = self._gate(tx, has_records)
        if erase is not None:
            return self._rejected(erase)

        owner_changes = transfer_owner_changes(tx)
        swapper_result = self._identifier.identify(tx.fee_payer, tx.signers, owner_changes)
        if not swapper_result.resolved:
            return self._unresolved(tx, swapper_result)
        swapper = swapper_result.swapper

        # Token legs seen only in transfers still count as non-native activity
        filtered = self._noise_filter.filter(tx.balance_changes, swapper, activity=owner_changes)
        asset_map = self._collector.collect(tx.transfers, filtered.economic, swapper)
        logger.debug(
            "%s: %d transfer(s), %d economic account change(s) for %s",
            tx.signature, len(tx.transfers), len(filtered.economic), swapper,
        )
        return self._finish(tx, swapper_result, asset_map, filtered)
