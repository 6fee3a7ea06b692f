"""Storefront forms."""

from datetime import timedelta

from django import forms

from .quantity import clamp_quantity

DELIVERY_DAYS = 7

PAYMENT_CHOICES = [
    ("cod", "Cash on delivery"),
    ("online", "Online payment"),
]

METAL_CHOICES = [
    ("gold", "Gold"),
    ("silver", "Silver"),
    ("platinum", "Platinum"),
    ("diamond", "Diamond"),
]

PURITY_CHOICES = [
    ("24k", "24K"),
    ("22k", "22K"),
    ("18k", "18K"),
    ("14k", "14K"),
]


class SignInForm(forms.Form):
    """Identity returned by the Google sign-in button."""

    name = forms.CharField(max_length=120, required=False)
    email = forms.EmailField()


class SignUpForm(forms.Form):
    name = forms.CharField(max_length=120)
    email = forms.EmailField()
    mobile = forms.RegexField(regex=r"^\+?\d{10,13}$", error_messages={"invalid": "Enter a valid mobile number."})


class AddToCartForm(forms.Form):
    product_id = forms.IntegerField(min_value=1)
    quantity = forms.IntegerField(required=False)
    stock = forms.IntegerField(required=False, min_value=0)
    size = forms.CharField(max_length=20, required=False)

    def clean(self):
        cleaned = super().clean()
        stock = cleaned.get("stock")
        if stock == 0:
            raise forms.ValidationError("This product is out of stock.")
        cleaned["quantity"] = clamp_quantity(cleaned.get("quantity") or 1, stock)
        return cleaned


class RecordIdForm(forms.Form):
    """A single record id posted by a cart, coupon or wishlist button."""

    def __init__(self, data, field_name):
        super().__init__(data)
        self.field_name = field_name
        self.fields[field_name] = forms.IntegerField(min_value=1)

    @property
    def value(self):
        return self.cleaned_data[self.field_name]


class CouponForm(forms.Form):
    coupon_code = forms.CharField(max_length=40, label="Coupon code")

    def clean_coupon_code(self):
        return self.cleaned_data["coupon_code"].strip().upper()


class CheckoutForm(forms.Form):
    order_date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    h_no = forms.CharField(max_length=60, label="House no.")
    street = forms.CharField(max_length=120)
    landmark = forms.CharField(max_length=120, required=False)
    city = forms.CharField(max_length=60)
    state = forms.CharField(max_length=60)
    pincode = forms.RegexField(regex=r"^\d{6}$", error_messages={"invalid": "Enter a 6 digit pincode."})
    payment = forms.ChoiceField(choices=PAYMENT_CHOICES, initial="cod")
    notes = forms.CharField(widget=forms.Textarea, required=False)

    def delivery_address(self) -> str:
        data = self.cleaned_data
        parts = [data["h_no"], data["street"], data.get("landmark", ""), data["city"], data["state"], data["pincode"]]
        return ", ".join(parts)

    def to_order(self, cart_id) -> dict:
        """Order payload for ``POST /user/order``; delivery is expected a week after the order date."""
        data = self.cleaned_data
        return {
            "cart_id": cart_id,
            "delivery_address": self.delivery_address(),
            "order_date": data["order_date"].isoformat(),
            "expected_delivery": (data["order_date"] + timedelta(days=DELIVERY_DAYS)).isoformat(),
            "payment": data["payment"],
            "notes": data.get("notes", ""),
        }


class CustomOrderForm(forms.Form):
    category_id = forms.TypedChoiceField(coerce=int, label="Category")
    metal = forms.ChoiceField(choices=METAL_CHOICES)
    purity = forms.ChoiceField(choices=PURITY_CHOICES)
    size = forms.CharField(max_length=20)
    weight = forms.DecimalField(min_value=0, decimal_places=3, help_text="Approximate weight in grams")
    budget = forms.DecimalField(min_value=0, decimal_places=2, required=False)
    description = forms.CharField(widget=forms.Textarea)
    note = forms.CharField(widget=forms.Textarea, required=False)

    def __init__(self, *args, categories=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["category_id"].choices = [
            (category.get("id"), category.get("name", "")) for category in categories
        ]


class EnquiryForm(forms.Form):
    KIND_CHOICES = [
        ("contact", "General enquiry"),
        ("compare-gold", "Compare gold"),
        ("compare-price", "Compare price"),
    ]

    name = forms.CharField(max_length=120)
    email = forms.EmailField()
    mobile = forms.CharField(max_length=15)
    kind = forms.ChoiceField(choices=KIND_CHOICES, initial="contact")
    message = forms.CharField(widget=forms.Textarea)
