from django.urls import path
from .views import account_status_view, pool_status_view

urlpatterns = [
    path("", pool_status_view, name="pool_status"),
    path("accounts/<str:address>/", account_status_view, name="pool_account_status"),
]
