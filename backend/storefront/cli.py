"""
Storefront command line

Usage:
    storefront demo [--scenario normal|insufficient-balance|all]
    storefront serve [--host HOST] [--port PORT] [--reload]

The demo runs the sample checkouts against a fresh sample catalog and
prints the shipment notice and receipt, or the rejection reason.

Author: TM3
Date: 2025-10-17
"""
import argparse
import sys
from decimal import Decimal
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from storefront.core.config import settings
from storefront.core.logging_config import configure_logging
from storefront.domain.cart import Cart
from storefront.domain.catalog import BISCUITS, CHEESE, SCRATCH_CARD, TV, build_sample_catalog
from storefront.domain.customer import CustomerAccount
from storefront.domain.receipt import CheckoutResult
from storefront.services.checkout_service import CheckoutService
from storefront.services.receipt_formatter import format_receipt
from storefront.services.shipping_service import ConsoleShipmentNotifier

# scenario -> (title, customer balance, [(sku, quantity), ...])
SCENARIOS: Dict[str, Tuple[str, Decimal, List[Tuple[str, int]]]] = {
    "normal": (
        "NORMAL CHECKOUT",
        Decimal("2000"),
        [(CHEESE, 2), (BISCUITS, 1), (SCRATCH_CARD, 1)],
    ),
    "insufficient-balance": (
        "INSUFFICIENT BALANCE",
        Decimal("1000"),
        [(CHEESE, 2), (BISCUITS, 1), (SCRATCH_CARD, 1), (TV, 1)],
    ),
}


def run_scenario(name: str, out: Optional[TextIO] = None) -> CheckoutResult:
    """Run one demo scenario on a fresh catalog and print the outcome"""
    out = out or sys.stdout
    title, balance, lines = SCENARIOS[name]
    catalog = build_sample_catalog()
    customer = CustomerAccount(name="Demo customer", balance=balance)

    cart = Cart(customer_id=customer.id)
    for sku, quantity in lines:
        cart.add_item(catalog[sku], quantity)

    service = CheckoutService(
        notifier=ConsoleShipmentNotifier(out),
        rate_per_kg=settings.SHIPPING_RATE_PER_KG
    )

    print("=" * 80, file=out)
    print(title, file=out)
    print("=" * 80, file=out)

    result = service.checkout(cart, customer)
    if result.succeeded:
        print(format_receipt(result.receipt), file=out)
    else:
        print(f"Error: {result.reason}", file=out)
    print(file=out)

    return result


def _demo(args: argparse.Namespace) -> int:
    names = list(SCENARIOS) if args.scenario == "all" else [args.scenario]
    for name in names:
        run_scenario(name)
    return 0


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront", description="Storefront checkout")
    parser.add_argument('--log-level', default=None, help='Override LOG_LEVEL (DEBUG, INFO, ...)')
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser("demo", help="Run the sample checkout scenarios")
    demo.add_argument(
        '--scenario',
        choices=sorted(SCENARIOS) + ["all"],
        default="all",
        help='Scenario to run (default: all)'
    )
    demo.set_defaults(handler=_demo)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument('--host', default=settings.API_HOST)
    serve.add_argument('--port', type=int, default=settings.API_PORT)
    serve.add_argument('--reload', action='store_true', help='Reload on code changes')
    serve.set_defaults(handler=_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    handler: Callable[[argparse.Namespace], int] = args.handler
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
