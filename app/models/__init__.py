from app.models.group import Group
from app.models.group_member import GroupMember
from app.models.expense import GroupExpense
from app.models.expense_share import ExpenseShare
from app.models.rule import Rule
from app.models.split import Split, SplitParticipant
from app.models.budget import Budget

__all__ = [
    "Group",
    "GroupMember",
    "GroupExpense",
    "ExpenseShare",
    "Rule",
    "Split",
    "SplitParticipant",
    "Budget",
]
