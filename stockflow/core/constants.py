REASON_STOCK_IN = "stock_in"
REASON_SALE = "sale"
REASON_TRANSFER = "transfer"
REASON_ADJUSTMENT = "adjustment"
REASON_RETURN = "return"

MOVEMENT_REASONS = (
    REASON_STOCK_IN,
    REASON_SALE,
    REASON_TRANSFER,
    REASON_ADJUSTMENT,
    REASON_RETURN,
)

SECONDS_PER_DAY = 24 * 60 * 60
MIN_OBSERVED_DAYS = 1
