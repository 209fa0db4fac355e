from django.urls import path
from .views import main_views as views
from .views import dashboard_views
from .views import invoice_views
from .views import customer_views

app_name = "billing"

urlpatterns = [
    path('', views.landing_view, name='home'),
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),

    path('dashboard/', dashboard_views.dashboard_overview, name='dashboard'),

    # Invoices
    path('dashboard/invoices', invoice_views.invoice_list, name='invoice_list'),
    path('dashboard/invoices/create', invoice_views.invoice_create, name='invoice_create'),
    path('dashboard/invoices/<str:invoice_id>/edit', invoice_views.invoice_edit, name='invoice_edit'),
    path('dashboard/invoices/<str:invoice_id>/delete', invoice_views.invoice_delete, name='invoice_delete'),

    # Customers
    path('dashboard/customers', customer_views.customer_list, name='customer_list'),
    path('dashboard/customers/create', customer_views.customer_create, name='customer_create'),
    path('dashboard/customers/<str:customer_id>/delete', customer_views.customer_delete, name='customer_delete'),
]
