"""Tests for storefront forms."""

from datetime import date

import pytest

from jewelstore.store.forms import AddToCartForm, CheckoutForm, CouponForm, CustomOrderForm, RecordIdForm


class TestAddToCartForm:
    def test_quantity_clamped_to_stock(self):
        form = AddToCartForm(data={"product_id": 3, "quantity": 9, "stock": 4})

        assert form.is_valid()
        assert form.cleaned_data["quantity"] == 4

    def test_missing_quantity_defaults_to_one(self):
        form = AddToCartForm(data={"product_id": 3})

        assert form.is_valid()
        assert form.cleaned_data["quantity"] == 1

    def test_out_of_stock_rejected(self):
        form = AddToCartForm(data={"product_id": 3, "quantity": 1, "stock": 0})

        assert not form.is_valid()
        assert form.non_field_errors() == ["This product is out of stock."]


class TestRecordIdForm:
    def test_valid_id(self):
        form = RecordIdForm({"item_id": "11"}, "item_id")

        assert form.is_valid()
        assert form.value == 11

    @pytest.mark.parametrize("raw", ["", "abc", "0", "-3"])
    def test_rejects_non_positive_or_non_numeric(self, raw):
        assert not RecordIdForm({"item_id": raw}, "item_id").is_valid()

    def test_missing_field(self):
        assert not RecordIdForm({}, "cart_id").is_valid()


class TestCouponForm:
    def test_code_normalized(self):
        form = CouponForm(data={"coupon_code": "  gold10 "})

        assert form.is_valid()
        assert form.cleaned_data["coupon_code"] == "GOLD10"


class TestCheckoutForm:
    def valid_data(self, **overrides):
        data = {
            "order_date": "2026-03-01",
            "h_no": "12A",
            "street": "MG Road",
            "landmark": "Near temple",
            "city": "Chennai",
            "state": "Tamil Nadu",
            "pincode": "600001",
            "payment": "cod",
        }
        data.update(overrides)
        return data

    def test_order_payload(self):
        form = CheckoutForm(data=self.valid_data())
        assert form.is_valid(), form.errors

        order = form.to_order(9)

        assert order["cart_id"] == 9
        assert order["delivery_address"] == "12A, MG Road, Near temple, Chennai, Tamil Nadu, 600001"
        assert order["order_date"] == date(2026, 3, 1).isoformat()
        assert order["expected_delivery"] == "2026-03-08"
        assert order["payment"] == "cod"

    def test_pincode_must_have_six_digits(self):
        form = CheckoutForm(data=self.valid_data(pincode="6001"))

        assert not form.is_valid()
        assert form.errors["pincode"] == ["Enter a 6 digit pincode."]


class TestCustomOrderForm:
    def test_category_choices_from_backend(self):
        form = CustomOrderForm(categories=[{"id": 1, "name": "Rings"}, {"id": 2, "name": "Chains"}])

        assert form.fields["category_id"].choices == [(1, "Rings"), (2, "Chains")]

    def test_valid_submission(self):
        form = CustomOrderForm(
            data={
                "category_id": "1",
                "metal": "gold",
                "purity": "22k",
                "size": "12",
                "weight": "8.5",
                "description": "Temple design ring",
            },
            categories=[{"id": 1, "name": "Rings"}],
        )

        assert form.is_valid(), form.errors
        assert form.cleaned_data["category_id"] == 1
