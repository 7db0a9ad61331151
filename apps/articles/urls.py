from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ArticleViewSet

app_name = 'articles'

router = DefaultRouter()
router.register(r'', ArticleViewSet, basename='article')

urlpatterns = [
    # GET    /api/articles/             - List published articles
    # POST   /api/articles/             - Create article
    # GET    /api/articles/{id}/        - Get article
    # PATCH  /api/articles/{id}/        - Update article (author)
    # DELETE /api/articles/{id}/        - Delete article (author or staff)
    # POST   /api/articles/{id}/view/   - Record a view
    path('', include(router.urls)),
]
