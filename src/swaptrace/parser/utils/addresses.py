"""Static Solana address tables: priority mints, known programs and pools."""

# SOL has 9 decimal places (lamports). Providers report native SOL under the wrapped mint.
NATIVE_MINT = "So11111111111111111111111111111111111111112"
NATIVE_DECIMALS = 9
NATIVE_SYMBOL = "SOL"

USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"

STABLECOIN_MINTS: frozenset[str] = frozenset({
    USDC_MINT,
    USDT_MINT,
    "2b1kV6DkPAnxd5ixfnxCpjxmKwqjjaYmCZfHsFu24GXo",  # PYUSD
    "USDSwr9ApdHk5bvJKMjzff41FfuX8bSxdKcR81vTwcA",  # USDS
    "EjmyN6qEC1Tf1JxiG1ae7UTJhUxSwk1TCWNWqxWV4J6o",  # DAI
    "2u1tszSeqZ3qBWF3uNGPFc8TzMk2tdiwknnRMWGWjGWH",  # USDG
    "USD1ttGY1N17NEEHLmELoaybftRBUSErhqYiQzvEmuB",  # USD1
    "HzwqbKZw8HxMN6bF2yFZNrht3c2iXXzpKcFu7uBEDKtr",  # EURC
})

# Core but not quote-grade: liquid staking SOL, wrapped BTC/ETH
OTHER_CORE_MINTS: frozenset[str] = frozenset({
    "jupSoLaHXQiZZTSfEWMTRRgpnyFm8f6sZdosWBjx93v",  # jupSOL
    "bSo13r4TkiE4KumL71LsHTPpL2euBYLFx6h9HP3piy1",  # bSOL
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So",  # mSOL
    "7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj",  # stSOL
    "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn",  # jitoSOL
    "cbbtcf3aa214zXHbiAZQwf4122FBYbraNdFqgw4iMij",  # cbBTC
    "9n4nbM75f5Ui33ZbPYXn59EwSgE8CGsHtAeTH5YFeJ9E",  # wBTC
    "7vfCXTUXx5WJV5JADk17DUJ4ksgau7utNKj4b963voxs",  # wETH
})

KNOWN_SYMBOLS: dict[str, str] = {
    NATIVE_MINT: NATIVE_SYMBOL,
    USDC_MINT: "USDC",
    USDT_MINT: "USDT",
    "jupSoLaHXQiZZTSfEWMTRRgpnyFm8f6sZdosWBjx93v": "jupSOL",
    "bSo13r4TkiE4KumL71LsHTPpL2euBYLFx6h9HP3piy1": "bSOL",
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So": "mSOL",
    "J1toso1uCk3RLmjorhTtrVwY9HJ7X8V9yYac6Y7kGCPn": "jitoSOL",
}

SYSTEM_PROGRAM = "11111111111111111111111111111111"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
ASSOCIATED_TOKEN_PROGRAM = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
COMPUTE_BUDGET_PROGRAM = "ComputeBudget111111111111111111111111111111"

SYSTEM_ACCOUNTS: frozenset[str] = frozenset({
    SYSTEM_PROGRAM,
    TOKEN_PROGRAM,
    TOKEN_2022_PROGRAM,
    ASSOCIATED_TOKEN_PROGRAM,
    COMPUTE_BUDGET_PROGRAM,
    "SysvarRent111111111111111111111111111111111",
    "SysvarC1ock11111111111111111111111111111111",
})

KNOWN_AMM_POOLS: frozenset[str] = frozenset({
    # Raydium
    "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8",
    "5Q544fKrFoe6tsEbD7S8EmxGTJYAKtTVhAW5Q5pge4j1",
    "CAMMCzo5YL8w4VFF8KVHrK22GGUsp5VTaW7grrKgrWqK",
    # Orca
    "9W959DqEETiGZocYWCQPaJ6sBmUzgfxXfqGeTEdp3aQP",
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc",
    # Jupiter
    "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4",
    "JUP4Fb2cqiRUcaTHdrPC8h2gNsA2ETXiPDD33WcGuJB",
    # Pump.fun bonding curve + AMM
    "6EF8rrecthR5Dkzon8Nwu78hRvfCKubJ14M5uBEwF6P",
    "pAMMBay6oceH9fJKBRHGP5D4bD4sWpmSwMn52FMfXEA",
    # Meteora
    "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo",
    "Eo7WjKq67rjJQSZxS6z3YkapzY3eMj6Xy8X5EQVn5UaB",
})

# Provider "type" labels that are never swaps
NON_SWAP_TRANSACTION_TYPES: frozenset[str] = frozenset({
    "CHECKANDSETSEQUENCENUMBER",
    "COMPUTE_BUDGET",
    "SET_COMPUTE_UNIT_LIMIT",
    "SET_COMPUTE_UNIT_PRICE",
    "CREATE_ACCOUNT",
    "INITIALIZE_ACCOUNT",
    "CLOSE_ACCOUNT",
    "TOKEN_TRANSFER",
    "TRANSFER",
    "NFT_MINT",
    "NFT_BURN",
    "NFT_TRANSFER",
    "STAKE",
    "UNSTAKE",
    "VOTE",
    "WITHDRAW",
    "DEPOSIT",
    "CLAIM",
    "APPROVE",
    "REVOKE",
})

# Shyft action types
SWAP_ACTION_TYPES: frozenset[str] = frozenset({"SWAP", "JUPITER_SWAP", "RAYDIUM_SWAP", "ORCA_SWAP"})
TRANSFER_ACTION_TYPES: frozenset[str] = frozenset({"TOKEN_TRANSFER", "SOL_TRANSFER", "TRANSFER"})
# Bookkeeping actions, ignored when deciding whether a transaction only moved funds
PROTOCOL_ACTION_TYPES: frozenset[str] = frozenset({
    "CHECKANDSETSEQUENCENUMBER",
    "COMPUTE_BUDGET",
    "SET_COMPUTE_UNIT_LIMIT",
    "SET_COMPUTE_UNIT_PRICE",
    "CREATE_ACCOUNT",
    "INITIALIZE_ACCOUNT",
    "CLOSE_ACCOUNT",
})


def short_mint(mint: str) -> str:
    """Fallback display symbol: first and last 4 chars of the mint."""
    return f"{mint[:4]}...{mint[-4:]}"
