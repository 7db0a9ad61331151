from django.urls import path
from . import views

app_name = 'transactions'

urlpatterns = [
    path('', views.transactions, name='transactions'),
    path('callback/', views.callback, name='callback'),
    path('admin/', views.admin_transactions, name='admin-transactions'),
    path('check/<uuid:project_id>/', views.check_purchase, name='check-purchase'),
]
