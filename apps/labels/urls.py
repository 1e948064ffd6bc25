"""
URL configuration for labels app.
"""

from django.urls import path

from . import views

app_name = "labels"

urlpatterns = [
    path("api/labels/cart/", views.label_cart, name="cart"),
    path("api/labels/cart/<uuid:cart_item_id>/", views.label_cart_item, name="cart_item"),
    path("api/labels/jobs/", views.print_jobs, name="job_list"),
    path("api/labels/jobs/<uuid:job_id>/reprint/", views.print_job_reprint, name="job_reprint"),
    path("api/labels/verify-price/", views.verify_price, name="verify_price"),
]
