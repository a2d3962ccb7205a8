"""Review endpoints."""
from decimal import Decimal

import pytest

from apps.reviews.models import Review
from core.constants import JobStatus, Role

pytestmark = pytest.mark.django_db


@pytest.fixture
def completed_job(client_user, freelancer, make_job):
    return make_job(client_user, status=JobStatus.COMPLETED, freelancer=freelancer)


class TestCreateReview:

    def test_client_reviews_completed_job(self, auth_client, client_user, freelancer, completed_job):
        response = auth_client(client_user).post(
            f'/reviews/job/{completed_job.id}/', {'rating': 5, 'comment': 'Excellent'}, format='json'
        )
        assert response.status_code == 201
        body = response.json()
        assert body['rating'] == 5
        assert body['freelancer']['id'] == freelancer.id
        assert body['job']['id'] == completed_job.id

    def test_second_review_conflicts(self, auth_client, client_user, completed_job):
        client = auth_client(client_user)
        client.post(f'/reviews/job/{completed_job.id}/', {'rating': 5}, format='json')
        response = client.post(f'/reviews/job/{completed_job.id}/', {'rating': 3}, format='json')
        assert response.status_code == 400
        assert response.json()['code'] == 'conflict'
        assert Review.objects.get(job=completed_job).rating == 5

    @pytest.mark.parametrize('rating', [0, 6])
    def test_rating_out_of_range(self, auth_client, client_user, completed_job, rating):
        response = auth_client(client_user).post(
            f'/reviews/job/{completed_job.id}/', {'rating': rating}, format='json'
        )
        assert response.status_code == 400
        assert response.json()['code'] == 'validation_error'
        assert not Review.objects.exists()

    def test_job_must_be_completed(self, auth_client, client_user, freelancer, make_job):
        job = make_job(client_user, status=JobStatus.ACCEPTED, freelancer=freelancer)
        response = auth_client(client_user).post(f'/reviews/job/{job.id}/', {'rating': 4}, format='json')
        assert response.status_code == 400
        assert response.json()['code'] == 'invalid_state'

    def test_freelancer_cannot_review(self, auth_client, freelancer, completed_job):
        response = auth_client(freelancer).post(f'/reviews/job/{completed_job.id}/', {'rating': 5}, format='json')
        assert response.status_code == 403


class TestReviewManagement:

    @pytest.fixture
    def review(self, completed_job, freelancer):
        return Review.objects.create(job=completed_job, freelancer=freelancer, rating=4, comment='Good')

    def test_public_detail(self, api_client, review):
        response = api_client.get(f'/reviews/{review.id}/')
        assert response.status_code == 200
        assert response.json()['comment'] == 'Good'

    def test_owner_updates(self, auth_client, client_user, review):
        response = auth_client(client_user).put(f'/reviews/{review.id}/', {'rating': 2}, format='json')
        assert response.status_code == 200
        review.refresh_from_db()
        assert review.rating == 2
        assert review.comment == 'Good'

    def test_update_rejects_bad_rating(self, auth_client, client_user, review):
        response = auth_client(client_user).put(f'/reviews/{review.id}/', {'rating': 10}, format='json')
        assert response.status_code == 400
        review.refresh_from_db()
        assert review.rating == 4

    def test_freelancer_cannot_delete(self, auth_client, freelancer, review):
        assert auth_client(freelancer).delete(f'/reviews/{review.id}/').status_code == 403

    def test_admin_deletes(self, auth_client, admin_account, review):
        assert auth_client(admin_account).delete(f'/reviews/{review.id}/').status_code == 204
        assert not Review.objects.exists()

    def test_freelancer_reviews_listing(self, api_client, freelancer, review):
        response = api_client.get(f'/reviews/freelancer/{freelancer.id}/')
        assert response.status_code == 200
        assert [item['id'] for item in response.json()] == [review.id]

    def test_listing_for_unknown_freelancer(self, api_client, client_user):
        assert api_client.get('/reviews/freelancer/9999/').status_code == 404
        assert api_client.get(f'/reviews/freelancer/{client_user.id}/').status_code == 404

    def test_freelancer_rating_stats(self, api_client, freelancer, review):
        body = api_client.get('/users/freelancers/').json()
        stats = next(item for item in body if item['id'] == freelancer.id)['rating_stats']
        assert stats['average_rating'] == 4.0
        assert stats['total_ratings'] == 1
        assert stats['rating_breakdown']['4_star'] == 100.0


class TestScenario:

    def test_full_marketplace_flow(self, auth_client, make_user, make_job):
        """Client A posts, freelancer B accepts, A completes, pays and reviews once."""
        a = make_user(Role.CLIENT)
        b = make_user(Role.FREELANCER)
        job = make_job(a, budget='1000.00')

        assert auth_client(b).put(f'/jobs/{job.id}/accept/').status_code == 200
        assert auth_client(a).put(f'/jobs/{job.id}/complete/').status_code == 200
        b.refresh_from_db()
        assert b.balance == Decimal('1000.00')

        client = auth_client(a)
        assert client.post(f'/reviews/job/{job.id}/', {'rating': 5}, format='json').status_code == 201
        response = client.post(f'/reviews/job/{job.id}/', {'rating': 3}, format='json')
        assert response.status_code == 400
        assert response.json()['code'] == 'conflict'
