from datetime import date
from decimal import Decimal

import pytest

from app.core.bank_statement import (
    SAMPLE_CSV,
    decode_statement,
    detect_category,
    detect_columns,
    parse_amount,
    parse_bank_statement,
    parse_date,
)
from app.core.exceptions import CSVParseError


def test_sample_statement_preview():
    result = parse_bank_statement(SAMPLE_CSV)
    txs = result["transactions"]

    assert len(txs) == 5
    assert txs[0]["id"] == "temp_1"
    assert txs[0]["date"] == "2024-12-01"
    assert txs[0]["amount"] == Decimal("450.00")
    assert [t["type"] for t in txs] == ["expense", "expense", "income", "expense", "expense"]
    assert all(t["selected"] for t in txs)

    summary = result["summary"]
    assert summary["total"] == 5
    assert summary["total_amount"] == Decimal("2699")
    assert summary["total_income"] == Decimal("50000")
    assert summary["categories"] == [
        "Food & Dining", "Shopping", "Salary", "Entertainment", "Transportation",
    ]


def test_bank_export_with_withdrawal_column():
    text = (
        "Txn Date,Narration,Withdrawal Amt,Deposit Amt,Closing Balance\n"
        "15-Jan-2024,ZOMATO ORDER,350.00,,10000.00\n"
        "16-Jan-2024,NEFT FROM EMPLOYER,,60000.00,70000.00\n"
        "17-Jan-2024,BigBasket,\"1,249.50\",,68750.50\n"
    )

    txs = parse_bank_statement(text)["transactions"]

    # deposit-only rows have nothing in the withdrawal column
    assert [t["description"] for t in txs] == ["ZOMATO ORDER", "BigBasket"]
    assert txs[0]["date"] == "2024-01-15"
    assert txs[0]["category"] == "Food & Dining"
    assert txs[1]["amount"] == Decimal("1249.50")
    assert txs[1]["category"] == "Groceries"
    assert all(t["type"] == "expense" for t in txs)


def test_signed_amount_without_type_column():
    text = "Date,Details,Amount\n2024-03-01,Refund,500\n2024-03-02,Petrol pump,-1500\n"

    txs = parse_bank_statement(text)["transactions"]

    assert [(t["type"], t["amount"]) for t in txs] == [
        ("income", Decimal("500.00")),
        ("expense", Decimal("1500.00")),
    ]
    assert txs[1]["category"] == "Transportation"


def test_unparseable_date_falls_back_to_today():
    text = "Date,Description,Amount\nyesterday,Coffee,-120\n"

    txs = parse_bank_statement(text, today=date(2025, 6, 30))["transactions"]

    assert txs[0]["date"] == "2025-06-30"


def test_blank_description_and_zero_amounts():
    text = "Date,Description,Amount\n01/01/2024,,-10\n02/01/2024,Nothing,0\n03/01/2024,Junk,abc\n"

    txs = parse_bank_statement(text)["transactions"]

    assert len(txs) == 1
    assert txs[0]["description"] == "Unknown Transaction"
    assert txs[0]["category"] == "Others"


def test_header_only_is_rejected():
    with pytest.raises(CSVParseError, match="at least a header row"):
        parse_bank_statement("Date,Description,Amount\n")


def test_missing_columns_are_rejected():
    with pytest.raises(CSVParseError, match="Could not detect required columns"):
        parse_bank_statement("When,What\n01/01/2024,Coffee\n")


def test_detect_columns_prefers_withdrawal():
    cols = detect_columns(["Date", "Amount", "Credit", "Debit", "Particulars"])

    assert cols["date"] == 0
    assert cols["description"] == 4
    assert cols["amount"] == 3
    assert cols["amount_kind"] == "debit"


@pytest.mark.parametrize("raw, expected", [
    ("1,234.50", Decimal("1234.50")),
    ("-450", Decimal("-450")),
    ("(99.99)", Decimal("-99.99")),
    ("₹ 2,000", Decimal("2000")),
    ("", Decimal("0")),
    ("n/a", Decimal("0")),
])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("01/12/2024", "2024-12-01"),
    ("5-3-2024", "2024-03-05"),
    ("15-Jan-2024", "2024-01-15"),
    ("2024/02/29", "2024-02-29"),
    ("31/02/2024", None),
    ("15-Foo-2024", None),
    ("", None),
])
def test_parse_date(raw, expected):
    assert parse_date(raw) == expected


def test_detect_category_defaults_to_others():
    assert detect_category("Starbucks Coffee") == "Food & Dining"
    assert detect_category("Random vendor") == "Others"


def test_decode_statement_falls_back_to_latin1():
    raw = "Date,Description,Amount\n01/01/2024,Caf\xe9,-10\n".encode("cp1252")

    assert "Café" in decode_statement(raw)


def test_impossible_date_is_not_rolled_over():
    text = "Date,Description,Amount\n31/02/2024,Gym membership,-999\n"

    txs = parse_bank_statement(text, today=date(2025, 6, 30))["transactions"]

    assert txs[0]["date"] == "2025-06-30"
