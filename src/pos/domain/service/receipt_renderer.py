"""Receipt rendering, pure formatting over a Transaction's current state."""

from __future__ import annotations

from decimal import Decimal

from pos.domain.model.transaction import Transaction, TransactionLine

STORE_NAME = "CONVENIENCE STORE"


def _points(value: Decimal) -> str:
    return f"{value:.2f}"


def _quantity(value: Decimal) -> str:
    return f"{value.normalize():f}"


def _line_text(line: TransactionLine) -> str:
    text = line.product.name
    if line.quantity != 1:
        text += f" x{_quantity(line.quantity)}"
    text += f" @ {line.unit_price}"
    if line.discount.value > 0:
        text += f" ({line.discount} off)"
    text += f" = {line.subtotal}"
    return text


def _timestamp(tx: Transaction) -> str:
    return tx.created_at.strftime("%Y-%m-%d %H:%M UTC")


def render_receipt(tx: Transaction) -> str:
    """Short customer receipt."""
    width = 40
    out: list[str] = [
        "=" * width,
        STORE_NAME.center(width).rstrip(),
        "RECEIPT".center(width).rstrip(),
        "=" * width,
        f"Transaction ID: {tx.id}",
        f"Date: {_timestamp(tx)}",
        f"Cashier: {tx.cashier_id}",
    ]
    if tx.customer is not None:
        out.append(f"Customer: {tx.customer.full_name} ({tx.customer.tier.value})")
    out.append("-" * width)

    for line in tx.lines:
        text = _line_text(line)
        if line.notes:
            text += f" [{line.notes}]"
        out.append(text)

    out.append("-" * width)
    out.append(f"Subtotal: {tx.subtotal}")
    if tx.price_discount.amount > 0:
        out.append(f"Discount: -{tx.price_discount}")
    if tx.loyalty_points_used > 0:
        out.append(f"Loyalty Points Used: -${_points(tx.loyalty_points_used)}")
    out.append(f"Tax: {tx.tax}")
    out.append(f"TOTAL: {tx.final_total}")
    out.append("-" * width)
    out.append(f"Payment Method: {tx.payment_label}")
    out.append(f"Status: {tx.status_label}")
    if tx.refunded_amount.amount > 0:
        out.append(f"Refunded: {tx.refunded_amount}")

    if tx.customer is not None and tx.loyalty_points_earned > 0:
        out.append(f"Loyalty Points Earned: {_points(tx.loyalty_points_earned)}")
        out.append(f"Total Loyalty Points: {_points(tx.customer.loyalty_points)}")

    out += [
        "=" * width,
        "Thank you for shopping with us!".center(width).rstrip(),
        "=" * width,
    ]
    return "\n".join(out)


def render_detailed_receipt(tx: Transaction) -> str:
    """Full breakdown: customer, numbered items, finances, payment, loyalty."""
    width = 50
    out: list[str] = [
        "=" * width,
        "DETAILED TRANSACTION RECEIPT".center(width).rstrip(),
        "=" * width,
        f"Transaction ID: {tx.id}",
        f"Date & Time: {_timestamp(tx)}",
        f"Cashier: {tx.cashier_id}",
        f"Status: {tx.status_label}",
    ]

    if tx.customer is not None:
        out += [
            "",
            "Customer Information:",
            f"  Name: {tx.customer.full_name}",
            f"  Type: {tx.customer.tier.value}",
            f"  ID: {tx.customer.id}",
            f"  Discount Rate: {tx.customer.discount_rate}",
        ]

    out += ["", "-" * width, "ITEMS PURCHASED:", "-" * width]
    for number, line in enumerate(tx.lines, start=1):
        out.append(f"{number}. {_line_text(line)}")
        if line.notes:
            out.append(f"    Note: {line.notes}")

    out += ["-" * width, "FINANCIAL BREAKDOWN:", "-" * width]
    out.append(f"Items Subtotal: {tx.items_subtotal}")
    if tx.price_discount.amount > 0:
        out.append(f"Total Discounts: -{tx.price_discount}")
    if tx.loyalty_points_used > 0:
        out.append(f"Loyalty Points Used: -${_points(tx.loyalty_points_used)}")
    out.append(f"Subtotal: {tx.subtotal}")
    rate = f" ({tx.tax_rate})" if tx.tax_rate is not None else ""
    out.append(f"Tax{rate}: {tx.tax}")
    out.append(f"FINAL TOTAL: {tx.final_total}")

    out += ["", "-" * width, "PAYMENT INFORMATION:", "-" * width]
    out.append(f"Payment Method: {tx.payment_label}")
    out.append(f"Amount Paid: {tx.final_total}")
    if tx.refunded_amount.amount > 0:
        out.append(f"Amount Refunded: {tx.refunded_amount}")

    if tx.customer is not None and tx.loyalty_points_earned > 0:
        out += [
            "",
            "LOYALTY PROGRAM:",
            f"Points Earned: {_points(tx.loyalty_points_earned)}",
            f"Current Points Balance: {_points(tx.customer.loyalty_points)}",
        ]

    if tx.notes:
        out += ["", f"Transaction Notes: {tx.notes}"]

    out += [
        "=" * width,
        "Thank you for shopping with us!".center(width).rstrip(),
        "Please come again!".center(width).rstrip(),
        "=" * width,
    ]
    return "\n".join(out)
