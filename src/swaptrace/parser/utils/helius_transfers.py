"""Extract a TransferTransaction from a Helius enhanced-transaction payload."""

import logging
from decimal import Decimal, InvalidOperation

from swaptrace.parser.utils.addresses import NATIVE_DECIMALS, NATIVE_MINT
from swaptrace.parser.utils.shyft_changes import parse_timestamp
from swaptrace.parser.utils.types import BalanceChange, ItemizedTransfer, TransferTransaction

logger = logging.getLogger(__name__)


def extract_transfer_transaction(tx_data: dict) -> TransferTransaction:
    """Build the itemized-transfer transaction.

    tokenTransfers carry human-scale amounts without decimals; the decimals are recovered from
    accountData tokenBalanceChanges for the same mint when available.
    """
    fee_payer = tx_data.get("feePayer") or ""
    account_changes = _extract_account_changes(tx_data.get("accountData") or [])
    decimals_by_mint = {c.mint: c.decimals for c in account_changes if c.decimals is not None}
    decimals_by_mint[NATIVE_MINT] = NATIVE_DECIMALS

    if tx_data.get("transactionError"):
        status = "failed"
    else:
        status = "success"

    return TransferTransaction(
        signature=tx_data.get("signature") or "",
        timestamp=parse_timestamp(tx_data.get("timestamp")),
        fee_payer=fee_payer,
        signers=(fee_payer,) if fee_payer else (),
        balance_changes=tuple(account_changes),
        transfers=tuple(_extract_token_transfers(tx_data.get("tokenTransfers") or [], decimals_by_mint)),
        protocol=tx_data.get("source") or None,
        status=status,
        type=tx_data.get("type"),
    )


def _extract_token_transfers(entries: list, decimals_by_mint: dict[str, int]) -> list[ItemizedTransfer]:
    transfers: list[ItemizedTransfer] = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("mint"):
            logger.warning("Skipping token transfer without mint: %r", entry)
            continue
        try:
            amount = Decimal(str(entry.get("tokenAmount")))
        except (InvalidOperation, TypeError, ValueError):
            logger.warning("Skipping token transfer with bad amount: mint=%s tokenAmount=%r",
                           entry.get("mint"), entry.get("tokenAmount"))
            continue
        transfers.append(ItemizedTransfer(
            mint=entry["mint"],
            from_owner=entry.get("fromUserAccount") or "",
            to_owner=entry.get("toUserAccount") or "",
            amount=amount,
            decimals=decimals_by_mint.get(entry["mint"]),
        ))
    return transfers


def _extract_account_changes(account_data: list) -> list[BalanceChange]:
    """nativeBalanceChange (lamports) per account plus tokenBalanceChanges per owner."""
    changes: list[BalanceChange] = []
    for account in account_data:
        if not isinstance(account, dict):
            logger.warning("Skipping account data entry that is not an object: %r", account)
            continue
        address = account.get("account") or ""

        lamports = account.get("nativeBalanceChange")
        if address and lamports:
            try:
                changes.append(BalanceChange(
                    mint=NATIVE_MINT,
                    owner=address,
                    amount=Decimal(str(lamports)).scaleb(-NATIVE_DECIMALS),
                    decimals=NATIVE_DECIMALS,
                    address=address,
                ))
            except (InvalidOperation, TypeError, ValueError):
                logger.warning("Skipping bad nativeBalanceChange for %s: %r", address, lamports)

        token_changes = account.get("tokenBalanceChanges") or []
        if not isinstance(token_changes, list):
            logger.warning("Skipping non-list tokenBalanceChanges for %s: %r", address, token_changes)
            continue
        for tbc in token_changes:
            if not isinstance(tbc, dict):
                logger.warning("Skipping token balance change that is not an object: %r", tbc)
                continue
            change = _token_balance_change(tbc, address)
            if change is not None:
                changes.append(change)
    return changes


def _token_balance_change(tbc: dict, account: str) -> BalanceChange | None:
    raw = tbc.get("rawTokenAmount") or {}
    owner = tbc.get("userAccount") or account
    mint = tbc.get("mint")
    if not mint or not owner:
        logger.warning("Skipping token balance change without mint/owner: %r", tbc)
        return None
    try:
        decimals = int(raw["decimals"])
        amount = Decimal(str(raw["tokenAmount"])).scaleb(-decimals)
    except (KeyError, TypeError, ValueError, InvalidOperation):
        logger.warning("Skipping token balance change with bad rawTokenAmount: mint=%s raw=%r", mint, raw)
        return None
    if amount == 0:
        return None
    return BalanceChange(
        mint=mint,
        owner=owner,
        amount=amount,
        decimals=decimals,
        address=tbc.get("tokenAccount"),
    )
