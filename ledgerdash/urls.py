from django.urls import path, include

handler404 = "billing.views.main_views.custom_404_view"
handler500 = "billing.views.main_views.custom_500_view"

urlpatterns = [
    path("", include("billing.urls", namespace="billing")),
]
