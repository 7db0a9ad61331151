from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import CategoryViewSet, ProjectViewSet, delete_comment

app_name = 'projects'

router = DefaultRouter()
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'', ProjectViewSet, basename='project')

urlpatterns = [
    path('comments/<uuid:pk>/', delete_comment, name='comment-delete'),
    path('', include(router.urls)),
]
