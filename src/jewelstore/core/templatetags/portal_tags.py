"""Template helpers for storefront and back-office pages."""

from django import template
from django.utils.safestring import mark_safe

from ..formatting import format_currency

register = template.Library()


@register.filter
def currency(value):
    """Render an amount as ``₹1000.00``."""
    return format_currency(value)


@register.filter
def add_class(field, css_class):
    """Add CSS classes to a form field widget, keeping existing ones."""
    existing = field.field.widget.attrs.get("class", "")
    classes = f"{existing} {css_class}".strip()
    return mark_safe(field.as_widget(attrs={"class": classes}))


@register.filter
def humanize_status(value):
    """``in_progress`` -> ``In progress``; empty -> ``Pending``."""
    if not value:
        return "Pending"
    text = str(value).replace("_", " ")
    return text[:1].upper() + text[1:]


@register.simple_tag
def coalesce(*values):
    """First truthy value, unrendered; missing keys count as empty.

    Backend records name the same field differently across endpoints, so
    templates use ``{% coalesce order.final_amount order.total_amount as total %}``
    where a ``|default:`` argument would fail on the missing key.
    """
    for value in values:
        if value:
            return value
    return ""
