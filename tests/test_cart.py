from retail_billing.models.cart import AmountDiscount, CartLine, CartLineUpdate, PercentageDiscount
from retail_billing.services.billing import compute_bill
from retail_billing.services.cart import add_line, apply_update, remove_line, switch_discount_mode


def _cart():
    return [
        CartLine(item_id="a", quantity=1, sale_rate=50),
        CartLine(item_id="b", quantity=2, sale_rate=30, tax_rate=5),
    ]


def test_apply_update_changes_only_given_fields():
    cart = _cart()
    updated = apply_update(cart, "b", CartLineUpdate(quantity=5))

    assert updated[1].quantity == 5
    assert updated[1].sale_rate == 30
    assert updated[1].tax_rate == 5
    assert cart[1].quantity == 2
    assert updated[0] is cart[0]


def test_apply_update_recomputes_bill():
    cart = apply_update(_cart(), "a", CartLineUpdate(discount=PercentageDiscount(percent=50)))
    bill = compute_bill(cart)

    assert bill.lines[0].line_discount == 25
    assert bill.invoice_total == 25 + 60


def test_apply_update_unknown_item_is_noop():
    cart = _cart()
    assert apply_update(cart, "zzz", CartLineUpdate(quantity=9)) == cart


def test_add_line_ignores_duplicates():
    cart = add_line(_cart(), CartLine(item_id="a", quantity=9))
    assert len(cart) == 2
    assert cart[0].quantity == 1

    cart = add_line(cart, CartLine(item_id="c"))
    assert [line.item_id for line in cart] == ["a", "b", "c"]


def test_remove_line():
    assert [line.item_id for line in remove_line(_cart(), "a")] == ["b"]


def test_switch_discount_mode_restarts_at_zero():
    line = CartLine(item_id="a", discount=AmountDiscount(value=12))

    switched = switch_discount_mode(line, "percentage")
    assert switched.discount == PercentageDiscount(percent=0)

    back = switch_discount_mode(switched, "amount")
    assert back.discount == AmountDiscount(value=0)
    assert switch_discount_mode(back, "amount") is back
