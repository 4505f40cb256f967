"""Classify one provider payload and print the result.

Usage:
    PYTHONPATH=src python scripts/classify_tx.py payload.json [shyft|helius]

The payload file may hold a single transaction object, a list of them, or a Shyft
response envelope ({"result": ...}). Without a provider argument the format is detected
from the payload shape. Thresholds and strategy come from SWAPTRACE_* env / .env.
"""

import json
import logging
import sys

from swaptrace.container import Container

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("classify_tx")


def _load_payloads(path: str) -> list[dict]:
    with open(path) as fh:
        data = json.load(fh)
    if isinstance(data, dict) and "result" in data:
        data = data["result"]
    if isinstance(data, dict):
        return [data]
    return list(data)


def main() -> int:
    if len(sys.argv) < 2:
        print(__doc__)
        return 2

    path = sys.argv[1]
    provider = sys.argv[2] if len(sys.argv) > 2 else None

    container = Container()
    registry = container.registry()
    logger.info("Swapper strategy: %s", container.settings().swapper_strategy.value)

    payloads = _load_payloads(path)
    with_swaps = 0
    for tx_data in payloads:
        result = registry.parse(tx_data, provider)
        if result.success:
            with_swaps += 1
        print(result.model_dump_json(indent=2, exclude_none=True))

    logger.info("Classified %d payload(s): %d with swaps, %d erased", len(payloads), with_swaps, len(payloads) - with_swaps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
