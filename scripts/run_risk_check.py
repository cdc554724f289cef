#!/usr/bin/env python3
"""Run price and batch risk checks from the command line.

Usage locally:
    python -m scripts.run_risk_check price "Trimol 500mg" 3000
    python -m scripts.run_risk_check price Trimol 12000 --offer "Apteka 1=11500" --offer "Apteka 2=3000"
    python -m scripts.run_risk_check batch A93KD881
    python -m scripts.run_risk_check high-risk
    python -m scripts.run_risk_check --seed 7 --strategy zscore_sigmoid price Almagel 9000

Sub-commands:
    price     — Score one observed price (or rank pharmacy offers with --offer)
    batch     — Score one production batch from its complaint history
    high-risk — List every batch at potential_risk or recall_recommended

Results are printed to stdout as JSON; logs go to stderr.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pharmarisk.config import Settings
from pharmarisk.facade import RiskQueryFacade
from pharmarisk.logging_config import setup_logging
from pharmarisk.schemas.price import PharmacyOffer


def _parse_offer(raw: str) -> PharmacyOffer:
    """Parse ``"<pharmacy>=<price>"``."""
    pharmacy, sep, price = raw.rpartition("=")
    if not sep or not pharmacy.strip():
        raise argparse.ArgumentTypeError(f"offer must look like 'Pharmacy=12000', got {raw!r}")
    try:
        return PharmacyOffer(pharmacy=pharmacy.strip(), price=float(price))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid price in offer {raw!r}") from None


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run pharmacy price and batch recall risk checks.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--catalog", default=None, help="Reference dataset JSON (default: bundled catalog)")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random source for reproducible scores")
    parser.add_argument(
        "--strategy",
        choices=("isolation_depth", "zscore_sigmoid", "iqr"),
        default=None,
        help="Price anomaly strategy (default: from settings)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    price = sub.add_parser("price", help="Score an observed price")
    price.add_argument("drug_name")
    price.add_argument("price", type=float)
    price.add_argument(
        "--offer",
        action="append",
        type=_parse_offer,
        default=[],
        help="Pharmacy offer as 'Name=price'; repeat to rank several offers",
    )

    batch = sub.add_parser("batch", help="Score a production batch")
    batch.add_argument("batch_number")

    sub.add_parser("high-risk", help="List batches at elevated recall risk")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = Settings()
    overrides = {}
    if args.catalog is not None:
        overrides["catalog_path"] = args.catalog
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.strategy is not None:
        overrides["price_strategy"] = args.strategy
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level, stream=sys.stderr)

    with RiskQueryFacade(settings=settings) as facade:
        if args.command == "price":
            if args.offer:
                offers = [PharmacyOffer(pharmacy="(observed)", price=args.price)] + args.offer
                result = facade.compare_offers(args.drug_name, offers)
            else:
                result = facade.score_price(args.drug_name, args.price)
        elif args.command == "batch":
            result = facade.score_batch(args.batch_number)
        else:
            result = facade.high_risk_batches()

    if isinstance(result, list):
        payload = [r.model_dump(by_alias=True, mode="json") for r in result]
    else:
        payload = result.model_dump(by_alias=True, mode="json")
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
