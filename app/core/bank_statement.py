"""
Bank statement CSV parsing.

Detects the date/description/amount columns from the header row, guesses a
category for every transaction from keywords in its description, and
returns a preview the user can pick transactions from before importing.
"""
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional
import csv
import logging
import re

from app.core.exceptions import CSVParseError
from app.core.utils import ZERO, qround

logger = logging.getLogger(__name__)

ENCODINGS = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]

DEFAULT_CATEGORY = "Others"

CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "Food & Dining": ["restaurant", "cafe", "food", "swiggy", "zomato", "dominos", "pizza", "mcdonalds", "burger", "starbucks"],
    "Transportation": ["uber", "ola", "rapido", "petrol", "fuel", "gas", "metro", "taxi", "parking"],
    "Shopping": ["amazon", "flipkart", "myntra", "ajio", "mall", "store", "shopping", "nike", "adidas"],
    "Entertainment": ["netflix", "prime", "spotify", "movie", "cinema", "theatre", "hotstar", "disney"],
    "Bills & Utilities": ["electricity", "water", "internet", "broadband", "phone", "mobile", "recharge", "bill"],
    "Healthcare": ["hospital", "clinic", "pharmacy", "medicine", "doctor", "medical", "apollo", "practo"],
    "Groceries": ["grocery", "supermarket", "bigbasket", "blinkit", "zepto", "dunzo", "vegetables", "milk"],
    "Transfer": ["transfer", "upi", "imps", "neft", "rtgs"],
    "ATM": ["atm", "withdrawal", "cash"],
    "Salary": ["salary", "wages", "payroll", "income"],
}

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

DMY = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
D_MON_Y = re.compile(r"^(\d{1,2})-([A-Za-z]{3})-(\d{4})$")
YMD = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})$")

SAMPLE_CSV = """Date,Description,Amount,Type
01/12/2024,Swiggy Food Order,-450,Debit
02/12/2024,Amazon Shopping,-1200,Debit
03/12/2024,Salary Credit,50000,Credit
04/12/2024,Netflix Subscription,-799,Debit
05/12/2024,Uber Ride,-250,Debit"""


def decode_statement(raw: bytes) -> str:
    for encoding in ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise CSVParseError("Could not decode file with any supported encoding")


def read_rows(text: str) -> List[List[str]]:
    reader = csv.reader(text.splitlines())
    return [
        [cell.strip() for cell in row]
        for row in reader
        if any(cell.strip() for cell in row)
    ]


def detect_columns(headers: List[str]) -> Dict:
    columns = {"date": -1, "description": -1, "amount": -1, "type": -1, "balance": -1}
    # withdrawal beats deposit beats a generic amount column
    amount_rank = 99
    kinds = ("debit", "credit", "signed")

    for index, header in enumerate(headers):
        h = re.sub(r"[^a-z0-9]", "", header.lower())

        if "date" in h:
            columns["date"] = index
        elif any(k in h for k in ("description", "narration", "particulars", "details")):
            columns["description"] = index
        elif any(k in h for k in ("withdrawal", "debit", "paid")):
            if amount_rank > 0:
                columns["amount"], amount_rank = index, 0
        elif any(k in h for k in ("deposit", "credit", "received")):
            if amount_rank > 1:
                columns["amount"], amount_rank = index, 1
        elif "amount" in h:
            if amount_rank > 2:
                columns["amount"], amount_rank = index, 2
        elif "type" in h:
            columns["type"] = index
        elif "balance" in h:
            columns["balance"] = index

    columns["amount_kind"] = kinds[amount_rank] if amount_rank < len(kinds) else None
    return columns


def parse_date(value: str) -> Optional[str]:
    """ISO date, or None. Impossible dates like 31/02/2024 are None, never rolled over."""
    value = (value or "").strip()
    if not value:
        return None

    try:
        m = DMY.match(value)
        if m:
            day, month, year = m.groups()
            return date(int(year), int(month), int(day)).isoformat()

        m = D_MON_Y.match(value)
        if m:
            day, mon, year = m.groups()
            month = MONTHS.get(mon.lower())
            if month is None:
                return None
            return date(int(year), month, int(day)).isoformat()

        m = YMD.match(value)
        if m:
            year, month, day = m.groups()
            return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        return None

    return None


def parse_amount(value: str) -> Decimal:
    """Signed amount; "(1,234.50)" and "-1234.50" are both negative, junk is 0."""
    cleaned = re.sub(r"[₹$€£,\s]", "", value or "")
    if not cleaned:
        return ZERO

    negative = "(" in cleaned or cleaned.startswith("-")
    digits = cleaned.replace("(", "").replace(")", "").replace("-", "")

    try:
        number = Decimal(digits)
    except InvalidOperation:
        return ZERO
    if not number.is_finite():
        return ZERO

    return -number if negative else number


def detect_category(description: str) -> str:
    desc = (description or "").lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in desc for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def _cell(row: List[str], index: int) -> str:
    if 0 <= index < len(row):
        return row[index]
    return ""


def parse_bank_statement(text: str, today: Optional[date] = None) -> Dict:
    rows = read_rows(text)

    if len(rows) < 2:
        raise CSVParseError("CSV file must contain at least a header row and one data row")

    columns = detect_columns(rows[0])

    if columns["date"] == -1 or columns["description"] == -1 or columns["amount"] == -1:
        raise CSVParseError(
            "Could not detect required columns (Date, Description, Amount). Please check your CSV format."
        )

    fallback_date = (today or date.today()).isoformat()
    transactions = []

    for row_number, row in enumerate(rows[1:], start=1):
        signed = parse_amount(_cell(row, columns["amount"]))
        if signed == 0:
            continue

        description = _cell(row, columns["description"]) or "Unknown Transaction"

        if columns["type"] != -1:
            kind = _cell(row, columns["type"]).lower()
            tx_type = "income" if ("credit" in kind or "deposit" in kind) else "expense"
        elif columns["amount_kind"] == "debit":
            tx_type = "expense"
        elif columns["amount_kind"] == "credit":
            tx_type = "income"
        else:
            tx_type = "income" if signed > 0 else "expense"

        transactions.append({
            "id": f"temp_{row_number}",
            "date": parse_date(_cell(row, columns["date"])) or fallback_date,
            "description": description,
            "amount": qround(abs(signed)),
            "category": detect_category(description),
            "type": tx_type,
            "selected": True,
            "original_row": row,
        })

    logger.info("Parsed bank statement: %d rows, %d transactions", len(rows) - 1, len(transactions))

    return {
        "transactions": transactions,
        "summary": summarize(transactions),
    }


def summarize(transactions: List[Dict]) -> Dict:
    categories = []
    for t in transactions:
        if t["category"] not in categories:
            categories.append(t["category"])

    return {
        "total": len(transactions),
        "total_amount": sum((t["amount"] for t in transactions if t["type"] == "expense"), ZERO),
        "total_income": sum((t["amount"] for t in transactions if t["type"] == "income"), ZERO),
        "categories": categories,
    }
