import argparse
import logging

from stockflow.core.errors import NotFoundError
from stockflow.core.logging import setup_logging
from stockflow.database import SessionLocal
from stockflow.services.alert_service import compute_low_stock_alerts

logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(description="Print low-stock alerts for one company.")
    parser.add_argument("--company-id", type=int, required=True)
    parser.add_argument(
        "--lookback-days",
        type=int,
        default=None,
        help="Sales window in days (defaults to SALES_LOOKBACK_DAYS).",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    db = SessionLocal()
    try:
        report = compute_low_stock_alerts(
            db,
            args.company_id,
            lookback_days=args.lookback_days,
        )
    except NotFoundError as exc:
        logger.error("%s (company_id=%s)", exc.message, args.company_id)
        raise SystemExit(1) from exc
    finally:
        db.close()

    print(report.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
