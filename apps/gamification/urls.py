from django.urls import path
from . import views

app_name = 'gamification'

urlpatterns = [
    path('config/', views.gamification_config, name='config'),
    path('stats/', views.my_stats, name='stats'),
    path('leaderboard/', views.leaderboard, name='leaderboard'),
]
