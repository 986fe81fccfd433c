"""
Computed operations on top of the collections: loyalty coupons, dish
popularity and the staff working-hours report.
"""

import logging
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Tuple

from pymongo.database import Database

from database import get_documents

logger = logging.getLogger(__name__)

# (upper bound inclusive, coefficient in tenths); above the last bound 7/10 applies
COUPON_TIERS = [(200, 5), (300, 6)]
COUPON_TOP_COEFFICIENT = 7
COUPON_MIN_BONUS = 100


def calculate_coupon(bonus: int) -> Tuple[int, int]:
    """Turn a bonus amount into ``(discount, remaining_bonus)``.

    Below 100 points nothing is granted. 100-200 points give half of the
    bonus as discount, 201-300 give 60%, anything above 300 gives 70%. The
    discount is truncated to an integer and the rest stays as bonus.
    """
    if bonus < 0:
        raise ValueError("bonus must be non-negative")
    if bonus < COUPON_MIN_BONUS:
        return 0, bonus

    coefficient = COUPON_TOP_COEFFICIENT
    for upper, tier_coefficient in COUPON_TIERS:
        if bonus <= upper:
            coefficient = tier_coefficient
            break

    # integer tenths keep floor() exact
    discount = bonus * coefficient // 10
    return discount, bonus - discount


def rank_dishes(menu_items: Iterable[Dict[str, Any]], order_items: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sum ordered amounts per dish, most ordered first.

    Ties are broken by name, reverse alphabetical. Dishes nobody ordered are
    left out, as are line items pointing at unknown dishes.
    """
    names = {item["id"]: item["name"] for item in menu_items}

    totals: Dict[str, int] = defaultdict(int)
    for line in order_items:
        if line.get("menu_id") in names:
            totals[line["menu_id"]] += int(line.get("amount", 0))

    rating = [{"name": names[menu_id], "orders_count": count} for menu_id, count in totals.items()]
    rating.sort(key=lambda r: (r["orders_count"], r["name"]), reverse=True)
    return rating


def get_most_popular_dishes(db: Database, restaurant_id: str) -> List[Dict[str, Any]]:
    menu_items = get_documents(db, "menuitem", {"restaurant_id": restaurant_id})
    if not menu_items:
        return []
    menu_ids = [m["id"] for m in menu_items]
    order_items = get_documents(db, "orderitem", {"menu_id": {"$in": menu_ids}})
    return rank_dishes(menu_items, order_items)


def week_bounds(start: datetime) -> Tuple[datetime, datetime]:
    """The reporting week: ``start`` through the end of the sixth day after it."""
    end = datetime(start.year, start.month, start.day) + timedelta(days=7) - timedelta(seconds=1)
    return start, end


def working_hours(schedules: Iterable[Dict[str, Any]]) -> float:
    total = 0.0
    for shift in schedules:
        begin, finish = shift.get("start_date_time"), shift.get("finish_date_time")
        if begin and finish:
            total += (finish - begin).total_seconds() / 3600
    return total


def get_weekly_working_hours(db: Database, start: datetime) -> List[Dict[str, Any]]:
    start, end = week_bounds(start)
    staff_list = get_documents(db, "staff")
    logger.info("Found %d staff members", len(staff_list))

    report = []
    for staff in staff_list:
        schedules = get_documents(db, "schedule", {
            "staff_id": staff["id"],
            "start_date_time": {"$gte": start},
            "finish_date_time": {"$lte": end},
        })
        hours = working_hours(schedules)
        logger.debug("Total working hours for %s: %s", staff["name"], hours)
        report.append({"name": staff["name"], "total_working_hours": hours})
    return report
