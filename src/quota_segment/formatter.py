# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Pure formatting helpers turning fetched figures into display strings.

Display contract:
    primary   "Used:$1.23"     amount spent today
    secondary "Left:$48.77"    remaining total balance

An empty daily_usage list is reported as NoDataToday ("Used:$0.00" with
status=no_data_today) rather than folded silently into a zero amount.
"""

from typing import Dict, Optional

from .models import BalanceSnapshot, SegmentResult, UsageSnapshot


OFFLINE = "Offline"
BALANCE_UNKNOWN = "Balance Unknown"
USAGE_UNKNOWN = "Usage Unknown"

STATUS_OK = "ok"
STATUS_OFFLINE = "offline"
STATUS_NO_DATA_TODAY = "no_data_today"
STATUS_BALANCE_UNAVAILABLE = "balance_unavailable"
STATUS_USAGE_UNAVAILABLE = "usage_unavailable"


def today_cost(snapshot: UsageSnapshot) -> Optional[float]:
    """Cost of the newest usage record, or None when the list is empty."""
    if not snapshot.daily_usage:
        return None
    return snapshot.daily_usage[0].total_cost


def format_spent(amount: float) -> str:
    return f"Used:${amount:.2f}"


def format_remaining(total_balance: float) -> str:
    return f"Left:${total_balance:.2f}"


def format_week_limit(weekly_spent: float, weekly_limit: float) -> str:
    return f"Week: ${weekly_spent:.2f}/${weekly_limit:.0f}"


def build_metadata(
    status: str,
    spent: Optional[float] = None,
    balance: Optional[BalanceSnapshot] = None,
    usage_endpoint: Optional[str] = None,
) -> Dict[str, str]:
    metadata: Dict[str, str] = {"status": status}
    if spent is not None:
        metadata["raw_spent"] = str(spent)
    if usage_endpoint is not None:
        metadata["usage_endpoint"] = usage_endpoint
    if balance is not None:
        metadata["total_balance"] = str(balance.total_balance)
        metadata["balance"] = str(balance.balance)
        metadata["pay_as_you_go_balance"] = str(balance.pay_as_you_go_balance)
        metadata["subscription_balance"] = str(balance.subscription_balance)
        if balance.weekly_limit is not None and balance.weekly_spent_balance is not None:
            metadata["weekly_spent"] = str(balance.weekly_spent_balance)
            metadata["weekly_limit"] = str(balance.weekly_limit)
            metadata["weekly_usage"] = format_week_limit(
                balance.weekly_spent_balance, balance.weekly_limit
            )
    return metadata


def offline_result() -> SegmentResult:
    return SegmentResult(
        primary=OFFLINE,
        secondary=OFFLINE,
        metadata={"status": STATUS_OFFLINE},
    )


def format_result(
    usage: Optional[UsageSnapshot],
    balance: Optional[BalanceSnapshot],
    usage_endpoint: Optional[str] = None,
) -> SegmentResult:
    """
    Reduce the fetched snapshots into the segment's display pair.

    Args:
        usage: Daily usage body, or None if every usage endpoint failed
        balance: Balance body, or None if the balance endpoint failed
        usage_endpoint: URL of the endpoint that answered the usage query

    Returns:
        SegmentResult whose metadata always carries a "status" entry
    """
    if usage is None and balance is None:
        return offline_result()

    spent = today_cost(usage) if usage is not None else None

    if usage is None:
        primary = USAGE_UNKNOWN
        status = STATUS_USAGE_UNAVAILABLE
    elif spent is None:
        primary = format_spent(0.0)
        status = STATUS_NO_DATA_TODAY
    else:
        primary = format_spent(spent)
        status = STATUS_OK

    if balance is None:
        secondary = BALANCE_UNKNOWN
        if status == STATUS_OK:
            status = STATUS_BALANCE_UNAVAILABLE
    else:
        secondary = format_remaining(balance.total_balance)

    return SegmentResult(
        primary=primary,
        secondary=secondary,
        metadata=build_metadata(
            status,
            spent=spent,
            balance=balance,
            usage_endpoint=usage_endpoint,
        ),
    )
