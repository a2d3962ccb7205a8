"""Shared pytest fixtures for the FreelanceHub API tests."""
import os
import tempfile
from decimal import Decimal
from itertools import count
from pathlib import Path

import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.jobs.models import Job
from core.constants import JobStatus, Role

PASSWORD = 'S3cure-pass-2024'

User = get_user_model()
_sequence = count(1)


@pytest.fixture(scope='session')
def django_db_modify_db_settings(django_db_modify_db_settings_parallel_suffix):
    """Keep the SQLite test database in a file so worker threads share it."""
    database = settings.DATABASES['default']
    if database['ENGINE'] == 'django.db.backends.sqlite3' and not database.get('TEST', {}).get('NAME'):
        name = Path(tempfile.gettempdir()) / f"freelancehub_test_{os.getpid()}.sqlite3"
        database.setdefault('TEST', {})['NAME'] = str(name)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    """Factory creating accounts with a usable password."""
    def make(role=Role.CLIENT, balance='0.00', **extra):
        index = next(_sequence)
        email = extra.pop('email', f"{role.lower()}{index}@example.com")
        return User.objects.create_user(
            username=email,
            email=email,
            password=PASSWORD,
            role=role,
            balance=Decimal(balance),
            name=extra.pop('name', f"{role.label} {index}"),
            **extra,
        )
    return make


@pytest.fixture
def make_job(db):
    def make(client, budget='1000.00', status=JobStatus.PENDING, freelancer=None, **extra):
        return Job.objects.create(
            client=client,
            freelancer=freelancer,
            title=extra.pop('title', 'Landing page redesign'),
            description=extra.pop('description', 'Refresh the marketing site.'),
            budget=Decimal(budget),
            status=status,
            **extra,
        )
    return make


@pytest.fixture
def client_user(make_user):
    return make_user(Role.CLIENT)


@pytest.fixture
def freelancer(make_user):
    return make_user(Role.FREELANCER)


@pytest.fixture
def admin_account(make_user):
    return make_user(Role.ADMIN)


@pytest.fixture
def auth_client():
    """Returns an ``APIClient`` authenticated as the given account."""
    def make(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return make
