from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Sign-up and login (tokens are refreshed via /api/auth/token/refresh/)
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),

    # Signed-in user
    path('me/', views.me, name='me'),
    path('account/', views.delete_account, name='delete-account'),

    # Staff
    path('employees/', views.list_employees, name='employees'),
]
