"""Extract a SwapTransaction from a Shyft parsed-transaction payload.

Shyft reports token_balance_changes with raw integer amounts (smallest units) plus the
token's decimals; native SOL legs of bonding-curve swaps only appear as SOL_TRANSFER actions,
and a SWAP action's tokens_swapped sometimes names a leg no balance change carries.
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation

from swaptrace.parser.utils.addresses import NATIVE_DECIMALS, NATIVE_MINT, SWAP_ACTION_TYPES
from swaptrace.parser.utils.types import BalanceChange, ItemizedTransfer, SwapTransaction

logger = logging.getLogger(__name__)


def extract_swap_transaction(tx_data: dict) -> SwapTransaction:
    """Build the provider-neutral transaction. Malformed balance entries are skipped."""
    signature = tx_data.get("signature") or ""
    if not signature:
        signatures = tx_data.get("signatures") or []
        signature = signatures[0] if signatures else ""

    protocol = tx_data.get("protocol") or {}
    protocol_name = protocol.get("name") if isinstance(protocol, dict) else None

    actions = tx_data.get("actions") or []
    if not isinstance(actions, list):
        logger.warning("Ignoring non-list actions: %r", actions)
        actions = []

    balance_changes = _extract_balance_changes(tx_data.get("token_balance_changes") or [])
    known_decimals = {c.mint: c.decimals for c in balance_changes if c.decimals is not None}
    known_decimals[NATIVE_MINT] = NATIVE_DECIMALS

    return SwapTransaction(
        signature=signature,
        timestamp=parse_timestamp(tx_data.get("timestamp")),
        fee_payer=tx_data.get("fee_payer") or "",
        signers=tuple(s for s in tx_data.get("signers") or [] if s),
        balance_changes=tuple(balance_changes),
        native_transfers=tuple(_extract_native_transfers(actions)),
        action_swap_legs=tuple(_extract_action_swap_legs(actions, known_decimals)),
        action_types=tuple(a["type"] for a in actions if isinstance(a, dict) and isinstance(a.get("type"), str)),
        protocol=protocol_name or None,
        status=tx_data.get("status"),
        type=tx_data.get("type"),
    )


def parse_timestamp(value) -> int:
    """Providers send ISO-8601 strings or epoch numbers; anything unparseable becomes 0."""
    if value is None or value == "":
        return 0
    try:
        if isinstance(value, (int, float)):
            return int(value)
        text = str(value)
        if text.isdigit():
            return int(text)
        return int(datetime.fromisoformat(text.replace("Z", "+00:00")).timestamp())
    except (ValueError, OverflowError):
        logger.warning("Unparseable timestamp %r, using 0", value)
        return 0


def _scale(raw, decimals: int) -> Decimal:
    return Decimal(str(raw)).scaleb(-decimals)


def _extract_balance_changes(entries: list) -> list[BalanceChange]:
    changes: list[BalanceChange] = []
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("mint") or not entry.get("owner"):
            logger.warning("Skipping balance change without mint/owner: %r", entry)
            continue

        decimals = entry.get("decimals")
        try:
            raw = Decimal(str(entry.get("change_amount")))
            if decimals is None:
                # Kept so identification can still see the owner; aggregation skips it
                amount, pre, post = raw, None, None
            else:
                decimals = int(decimals)
                amount = raw.scaleb(-decimals)
                pre = _scale(entry["pre_balance"], decimals) if entry.get("pre_balance") is not None else None
                post = _scale(entry["post_balance"], decimals) if entry.get("post_balance") is not None else None
        except (InvalidOperation, TypeError, ValueError):
            logger.warning(
                "Skipping balance change with bad amount: mint=%s change_amount=%r",
                entry.get("mint"), entry.get("change_amount"),
            )
            continue

        changes.append(BalanceChange(
            mint=entry["mint"],
            owner=entry["owner"],
            amount=amount,
            decimals=decimals,
            pre_balance=pre,
            post_balance=post,
            address=entry.get("address"),
            symbol=entry.get("symbol"),
        ))
    return changes


def _extract_native_transfers(actions: list) -> list[ItemizedTransfer]:
    transfers: list[ItemizedTransfer] = []
    for action in actions:
        if not isinstance(action, dict) or action.get("type") != "SOL_TRANSFER":
            continue
        info = action.get("info")
        if not isinstance(info, dict):
            logger.warning("Skipping SOL_TRANSFER action without info: %r", action)
            continue
        amount = info.get("amount")
        if amount is None:
            continue
        try:
            transfers.append(ItemizedTransfer(
                mint=NATIVE_MINT,
                from_owner=info.get("sender") or "",
                to_owner=info.get("receiver") or "",
                amount=Decimal(str(amount)),
                decimals=NATIVE_DECIMALS,
            ))
        except (InvalidOperation, ValueError):
            logger.warning("Skipping SOL_TRANSFER action with bad amount %r", amount)
    return transfers


def _extract_action_swap_legs(actions: list, known_decimals: dict[str, int]) -> list[BalanceChange]:
    """tokens_swapped.in/out as signed changes owned by the action's swapper."""
    legs: list[BalanceChange] = []
    for action in actions:
        if not isinstance(action, dict) or action.get("type") not in SWAP_ACTION_TYPES:
            continue
        info = action.get("info")
        if not isinstance(info, dict) or not info.get("swapper"):
            continue
        swapped = info.get("tokens_swapped")
        if not isinstance(swapped, dict):
            continue
        for side, sign in (("in", -1), ("out", 1)):
            leg = _swap_leg(swapped.get(side), info["swapper"], sign, known_decimals)
            if leg is not None:
                legs.append(leg)
    return legs


def _swap_leg(token, owner: str, sign: int, known_decimals: dict[str, int]) -> BalanceChange | None:
    if not isinstance(token, dict) or not token.get("token_address"):
        return None
    mint = token["token_address"]
    decimals = token.get("decimals")
    if decimals is None:
        decimals = known_decimals.get(mint)
    try:
        if decimals is not None and token.get("amount_raw") is not None:
            decimals = int(decimals)
            amount = _scale(token["amount_raw"], decimals)
        elif token.get("amount") is not None:
            # Human-scale amount only: keep the precision it was reported with
            amount = Decimal(str(token["amount"]))
            decimals = max(0, -amount.normalize().as_tuple().exponent) if amount.is_finite() else 0
        else:
            return None
    except (InvalidOperation, TypeError, ValueError):
        logger.warning("Skipping SWAP action leg with bad amount: mint=%s token=%r", mint, token)
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return BalanceChange(
        mint=mint,
        owner=owner,
        amount=sign * amount,
        decimals=decimals,
        symbol=token.get("symbol"),
    )
