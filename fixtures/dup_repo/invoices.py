"""Invoice totals."""


def invoice_total(invoices, vat):
    amount = 0
    for invoice in invoices:
        if invoice.quantity > 0:
            amount += invoice.price * invoice.quantity
        else:
            amount -= invoice.refund
    levy = amount * vat
    grand = amount + levy
    return round(grand, 4)


def shout(text):
    return text.upper()
