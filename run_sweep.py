#!/usr/bin/env python
"""
Script to cancel expired collection orders

Usage: python run_sweep.py [DD-Mon-YY]   (defaults to today)
"""
import logging
import sys
from datetime import date

from retail_orders.database import SessionLocal, engine, init_db
from retail_orders.dates import format_store_date
from retail_orders.exceptions import RetailOrderError
from retail_orders.logging_config import configure_logging
from retail_orders.services.order_service import OrderService

logger = logging.getLogger("run_sweep")


def main(argv):
    configure_logging()
    reference_date = argv[1] if len(argv) > 1 else format_store_date(date.today())

    init_db()
    db = SessionLocal()
    try:
        cancelled = OrderService(db).sweep_expired_collections(reference_date)
    except RetailOrderError as e:
        logger.error("Sweep failed: %s", e)
        return 1
    finally:
        db.close()
        engine.dispose()

    for order_id in cancelled:
        logger.info("Order %s has been cancelled", order_id)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
