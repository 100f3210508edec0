import logging
from typing import Dict
from decimal import Decimal
from app.core.settlement import compute_balances, compute_settlements
from app.core.utils import format_currency, qround
from app.models.group import Group

logger = logging.getLogger(__name__)


def group_net_balances(group: Group) -> Dict[str, Decimal]:
    """
    Returns:
        {
            member_id: net_balance (Decimal)
        }

    net_balance = total_paid - total_owed
    """
    return compute_balances(group.members, group.expenses)


def _balance_rows(group: Group, balances: Dict[str, Decimal]):
    names = {m.id: m.name for m in group.members}
    rows = []
    for member_id, balance in balances.items():
        amt = qround(balance)
        rows.append({
            "member_id": member_id,
            "name": names.get(member_id, member_id),
            "balance": float(amt),
            "formatted": format_currency(amt),
        })
    return rows


def get_group_balances(group: Group):
    return _balance_rows(group, group_net_balances(group))


def compute_group_settlements(group: Group):
    balances = group_net_balances(group)
    transfers = compute_settlements(balances)
    names = {m.id: m.name for m in group.members}

    settlements = []
    for t in transfers:
        amt = qround(t.amount)
        settlements.append({
            "from_id": t.from_member_id,
            "from_name": names.get(t.from_member_id),
            "to_id": t.to_member_id,
            "to_name": names.get(t.to_member_id),
            "amount": float(amt),
            "formatted": format_currency(amt),
        })

    logger.debug("Group %s settles in %d transfer(s)", group.id, len(settlements))

    return {
        "settlements": settlements,
        "balances": _balance_rows(group, balances),
        # same tolerance as the solver, so a settled group never lists transfers
        "is_settled": not transfers,
    }
