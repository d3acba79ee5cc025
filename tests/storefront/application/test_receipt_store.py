from storefront.checkout.receipt import RECEIPT_KEY, OrderSummary, ReceiptStore


def _summary(**overrides):
    fields = {
        "order_id": "CARD-0A1B2C3D4E",
        "email": "ana@example.com",
        "delivery_method": "shipping",
        "shipping": {"full_name": "Ana Lim", "city": "Austin"},
        "items": [{"id": 7, "title": "Astrox 88D Pro", "totalPrice": 229.0}],
        "subtotal": 229.0,
        "shipping_cost": 10.0,
        "total": 239.0,
        "payment_method": "Card",
    }
    fields.update(overrides)
    return OrderSummary(**fields)


class TestReceiptStore:
    def test_nothing_saved(self, local):
        assert ReceiptStore(local).load() is None

    def test_save_and_load(self, local):
        summary = _summary()
        ReceiptStore(local).save(summary)
        assert ReceiptStore(local).load() == summary

    def test_stored_as_json(self, local):
        ReceiptStore(local).save(_summary())
        stored = local.get(RECEIPT_KEY)
        assert stored["total"] == 239.0
        assert isinstance(stored["timestamp"], str)

    def test_latest_receipt_wins(self, local):
        receipts = ReceiptStore(local)
        receipts.save(_summary(order_id="CARD-1"))
        receipts.save(_summary(order_id="CARD-2"))
        assert receipts.load().order_id == "CARD-2"

    def test_unreadable_receipt(self, local):
        local.set(RECEIPT_KEY, {"order_id": "CARD-1"})
        assert ReceiptStore(local).load() is None
