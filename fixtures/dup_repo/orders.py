"""Order totals."""


def order_total(orders, tax_rate):
    subtotal = 0
    for order in orders:
        if order.quantity > 0:
            subtotal += order.price * order.quantity
        else:
            subtotal -= order.refund
    taxes = subtotal * tax_rate
    total = subtotal + taxes
    return round(total, 2)


def describe(order):
    return f"{order.id}: {order.price}"
