from django import forms
from django.conf import settings


class GoldPlanForm(forms.Form):
    invested_amount = forms.DecimalField(
        label="Investment amount",
        min_value=1,
        decimal_places=2,
        help_text="Amount in rupees to invest in gold",
    )

    def clean_invested_amount(self):
        amount = self.cleaned_data["invested_amount"]
        if amount > settings.MAX_INVESTMENT_AMOUNT:
            raise forms.ValidationError(
                f"The maximum investment per payment is {settings.MAX_INVESTMENT_AMOUNT}.",
                code="max_amount",
            )
        return amount
