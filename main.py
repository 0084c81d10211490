#!/usr/bin/env python3
"""Command line entry point for the MWS client."""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime, timezone

from mws import (
    ListOrderItemsRequest,
    ListOrdersRequest,
    MWSConfig,
    RequestReportRequest,
    create_mws_client,
)

logger = logging.getLogger(__name__)


def _parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 argument; values without an offset are UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Call Amazon MWS with SigV2 signed requests")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log query strings")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_orders = subparsers.add_parser("list-orders", help="ListOrders")
    list_orders.add_argument("--marketplace-id", action="append", required=True, dest="marketplace_ids")
    list_orders.add_argument("--created-after", type=_parse_datetime)
    list_orders.add_argument("--created-before", type=_parse_datetime)
    list_orders.add_argument("--last-updated-after", type=_parse_datetime)
    list_orders.add_argument("--order-status", action="append", default=[], dest="order_statuses")
    list_orders.add_argument("--max-results", type=int, dest="max_results_per_page")

    list_items = subparsers.add_parser("list-order-items", help="ListOrderItems")
    list_items.add_argument("amazon_order_id")

    request_report = subparsers.add_parser("request-report", help="RequestReport")
    request_report.add_argument("report_type")
    request_report.add_argument("--start-date", type=_parse_datetime)
    request_report.add_argument("--end-date", type=_parse_datetime)
    request_report.add_argument("--report-options")
    request_report.add_argument("--marketplace-id", action="append", dest="marketplace_ids")

    return parser


async def run(args: argparse.Namespace, config: MWSConfig) -> int:
    client = create_mws_client(config)

    if args.command == "list-orders":
        response = await client.orders.list_orders(ListOrdersRequest(
            marketplace_ids=args.marketplace_ids,
            created_after=args.created_after,
            created_before=args.created_before,
            last_updated_after=args.last_updated_after,
            order_statuses=args.order_statuses,
            max_results_per_page=args.max_results_per_page,
        ))
    elif args.command == "list-order-items":
        response = await client.orders.list_order_items(
            ListOrderItemsRequest(amazon_order_id=args.amazon_order_id)
        )
    else:
        response = await client.reports.request_report(RequestReportRequest(
            report_type=args.report_type,
            start_date=args.start_date,
            end_date=args.end_date,
            report_options=args.report_options,
            marketplace_ids=args.marketplace_ids,
        ))

    if not response.success:
        print(f"Error ({response.origin.value}): {response.error}", file=sys.stderr)
        if response.metadata:
            print(json.dumps(response.metadata, indent=2), file=sys.stderr)
        return 1

    result = asdict(response.data)
    result.pop("raw", None)
    print(json.dumps(result, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True
    )

    try:
        return asyncio.run(run(args, MWSConfig.from_env()))
    except ValueError as e:
        logger.error(f"Invalid request: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
