import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestArticleApi:

    def test_list_hides_drafts(self, api_client, article, draft_article):
        url = reverse('articles:article-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert 'content' not in response.data['results'][0]

    def test_create(self, writer_client, writer):
        url = reverse('articles:article-list')
        response = writer_client.post(url, {
            'title': 'Hackathon Recap',
            'content': 'We built things.',
            'category': 'events',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['author']['name'] == 'Writer'
        writer.refresh_from_db()
        assert writer.total_exp == 75

    def test_create_requires_auth(self, api_client):
        url = reverse('articles:article-list')
        response = api_client.post(url, {'title': 'Anon'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_by_other_user_forbidden(self, reader_client, article):
        url = reverse('articles:article-detail', kwargs={'pk': article.id})
        response = reader_client.patch(url, {'title': 'Changed'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_by_author(self, writer_client, article):
        url = reverse('articles:article-detail', kwargs={'pk': article.id})
        response = writer_client.patch(url, {'title': 'Thesis Season, Revised'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['title'] == 'Thesis Season, Revised'

    def test_view(self, api_client, article, writer):
        url = reverse('articles:article-record-view', kwargs={'pk': article.id})
        response = api_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'views': 1}
        writer.refresh_from_db()
        assert writer.total_exp == 1


@pytest.mark.django_db
class TestArticleMalformedIdentifiers:

    def test_view_with_malformed_pk(self, api_client):
        response = api_client.post('/api/articles/not-a-uuid/view/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_user_filter_must_be_uuid(self, api_client, article):
        url = reverse('articles:article-list')
        response = api_client.get(url, {'user': 'not-a-uuid'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_user_filter_with_uuid(self, api_client, article, writer):
        url = reverse('articles:article-list')
        response = api_client.get(url, {'user': str(writer.id)})

        assert response.data['count'] == 1
