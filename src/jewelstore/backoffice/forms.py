"""Back-office forms."""

from decimal import Decimal

from django import forms

from jewelstore.api.admin_sales import CUSTOM_ORDER_STATUSES, ORDER_STATUSES

STATUS_CHOICES = [(1, "Active"), (0, "Inactive")]

DISCOUNT_TYPE_CHOICES = [
    ("percentage", "Percentage"),
    ("flat", "Flat amount"),
]


def _choices(values):
    return [(value, value.replace("_", " ").capitalize()) for value in values]


class AdminLoginForm(forms.Form):
    username = forms.CharField(label="Email or username", max_length=150)
    password = forms.CharField(widget=forms.PasswordInput)


class OrderStatusForm(forms.Form):
    status = forms.ChoiceField(choices=_choices(ORDER_STATUSES))


class CustomOrderUpdateForm(forms.Form):
    status = forms.ChoiceField(choices=_choices(CUSTOM_ORDER_STATUSES))
    quoted_price = forms.DecimalField(min_value=0, decimal_places=2, required=False)
    expected_delivery = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date"}))
    admin_note = forms.CharField(widget=forms.Textarea, required=False)

    def to_payload(self) -> dict:
        data = self.cleaned_data
        payload = {"status": data["status"]}
        if data.get("quoted_price") is not None:
            payload["quoted_price"] = str(data["quoted_price"])
        if data.get("expected_delivery"):
            payload["expected_delivery"] = data["expected_delivery"].isoformat()
        if data.get("admin_note"):
            payload["admin_note"] = data["admin_note"]
        return payload


class CouponForm(forms.Form):
    coupon_code = forms.CharField(max_length=40)
    discount_type = forms.ChoiceField(choices=DISCOUNT_TYPE_CHOICES)
    value = forms.DecimalField(min_value=0, decimal_places=2)
    min_order_amount = forms.DecimalField(min_value=0, decimal_places=2, initial=0)
    description = forms.CharField(max_length=255, required=False)
    start_date = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date"}))
    end_date = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date"}))
    status = forms.TypedChoiceField(choices=STATUS_CHOICES, coerce=int, initial=1)

    def clean_coupon_code(self):
        return self.cleaned_data["coupon_code"].strip().upper()

    def clean(self):
        cleaned = super().clean()
        if cleaned.get("discount_type") == "percentage" and (cleaned.get("value") or 0) > 100:
            self.add_error("value", "A percentage discount cannot exceed 100.")
        start, end = cleaned.get("start_date"), cleaned.get("end_date")
        if start and end and end < start:
            self.add_error("end_date", "The end date must be after the start date.")
        return cleaned

    def to_payload(self) -> dict:
        payload = {}
        for key, value in self.cleaned_data.items():
            if value in (None, ""):
                continue
            payload[key] = value.isoformat() if hasattr(value, "isoformat") else value
        for key in ("value", "min_order_amount"):
            if key in payload:
                payload[key] = str(payload[key])
        return payload


class ProductForm(forms.Form):
    name = forms.CharField(max_length=200)
    category_id = forms.IntegerField(label="Category ID")
    collection_id = forms.IntegerField(label="Collection ID", required=False)
    metal_type = forms.CharField(max_length=40)
    purity = forms.CharField(max_length=20)
    weight = forms.DecimalField(min_value=0, decimal_places=3)
    making_charges = forms.DecimalField(min_value=0, decimal_places=2, required=False)
    price = forms.DecimalField(min_value=0, decimal_places=2)
    sizes = forms.CharField(
        required=False,
        help_text="One size per line as size:quantity, e.g. 12:4. Use OneSize:10 when the category has no sizes.",
        widget=forms.Textarea(attrs={"rows": 3}),
    )
    description = forms.CharField(widget=forms.Textarea, required=False)
    status = forms.TypedChoiceField(choices=STATUS_CHOICES, coerce=int, initial=1)

    def clean_sizes(self):
        sizes = []
        for line in self.cleaned_data["sizes"].splitlines():
            line = line.strip()
            if not line:
                continue
            size, _, quantity = line.partition(":")
            if not quantity.strip().isdigit():
                raise forms.ValidationError(f"Invalid size line: {line}")
            sizes.append({"size": size.strip(), "quantity": int(quantity)})
        return sizes

    def to_fields(self) -> dict:
        """Multipart fields; sizes are flattened to ``sizes[i][size]`` pairs."""
        fields = {key: value for key, value in self.cleaned_data.items() if key != "sizes" and value is not None}
        for index, entry in enumerate(self.cleaned_data.get("sizes") or []):
            fields[f"sizes[{index}][size]"] = entry["size"]
            fields[f"sizes[{index}][quantity]"] = entry["quantity"]
        return fields


class CategoryForm(forms.Form):
    name = forms.CharField(max_length=120)
    description = forms.CharField(widget=forms.Textarea, required=False)
    sizes = forms.CharField(max_length=255, required=False, help_text="Comma separated sizes, if any")
    status = forms.TypedChoiceField(choices=STATUS_CHOICES, coerce=int, initial=1)

    def to_fields(self) -> dict:
        return dict(self.cleaned_data)


class CollectionForm(forms.Form):
    name = forms.CharField(max_length=120)
    description = forms.CharField(widget=forms.Textarea, required=False)
    status = forms.TypedChoiceField(choices=STATUS_CHOICES, coerce=int, initial=1)

    def to_fields(self) -> dict:
        return dict(self.cleaned_data)


class BannerForm(forms.Form):
    title = forms.CharField(max_length=120)
    subtitle = forms.CharField(max_length=255, required=False)
    link = forms.CharField(max_length=255, required=False)
    position = forms.IntegerField(min_value=0, required=False)
    status = forms.TypedChoiceField(choices=STATUS_CHOICES, coerce=int, initial=1)

    def to_fields(self) -> dict:
        return dict(self.cleaned_data)


class SchemeForm(forms.Form):
    name = forms.CharField(label="Scheme", max_length=120)
    timeline = forms.CharField(max_length=60)
    min_amount = forms.DecimalField(min_value=0, decimal_places=2)
    points = forms.CharField(
        widget=forms.Textarea(attrs={"rows": 4}),
        required=False,
        help_text="One highlight per line",
    )
    status = forms.TypedChoiceField(choices=STATUS_CHOICES, coerce=int, initial=1)
    is_popular = forms.BooleanField(required=False)

    def clean_points(self):
        return [line.strip() for line in self.cleaned_data["points"].splitlines() if line.strip()]


class WalletDebitForm(forms.Form):
    amount = forms.DecimalField(min_value=Decimal("0.01"), decimal_places=2)
    description = forms.CharField(max_length=255, required=False)


class GoldVaultDebitForm(forms.Form):
    gold_grams = forms.DecimalField(min_value=Decimal("0.001"), decimal_places=3, label="Grams")
    description = forms.CharField(max_length=255, required=False)


class NotificationForm(forms.Form):
    title = forms.CharField(max_length=120)
    body = forms.CharField(widget=forms.Textarea)
    user_ids = forms.CharField(
        required=False,
        label="Customer IDs",
        help_text="Comma separated; leave empty to notify every customer",
    )

    def clean_user_ids(self):
        raw = self.cleaned_data["user_ids"]
        ids = []
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit():
                raise forms.ValidationError(f"Not a customer id: {part}")
            ids.append(int(part))
        return ids


class SettingsSectionForm(forms.Form):
    """One section of the business settings, built from its current values."""

    def __init__(self, *args, values=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.value_fields = []
        for key, value in (values or {}).items():
            if isinstance(value, (dict, list)):
                continue
            if isinstance(value, bool):
                field = forms.BooleanField(required=False, initial=value)
            elif isinstance(value, (int, float)):
                field = forms.DecimalField(required=False, initial=value)
            else:
                field = forms.CharField(required=False, initial=value)
            field.label = key.replace("_", " ").capitalize()
            self.fields[key] = field
            self.value_fields.append(key)

    def values(self) -> dict:
        result = {}
        for key in self.value_fields:
            value = self.cleaned_data.get(key)
            if isinstance(value, Decimal):
                value = int(value) if value == value.to_integral_value() else float(value)
            result[key] = value
        return result
