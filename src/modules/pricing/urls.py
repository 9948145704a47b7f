"""Pricing URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.pricing.views import CustomerPriceView

urlpatterns = [
    path("customer_prices/", CustomerPriceView.as_view(), name="customer_prices"),
]
