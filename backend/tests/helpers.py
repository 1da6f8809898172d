import os
import shutil
import tempfile
import unittest
from datetime import datetime, timedelta, timezone

from unittest import mock

from sitecms import create_app
from sitecms.config import TestingConfig, config_by_name
from sitecms.auth.identity import Actor
from sitecms.extensions import db
from sitecms.store.documents import get_store

ADMIN = Actor(user_id="admin-1", role="admin", anonymous=False, site_id="demo")
VISITOR = Actor(user_id="visitor-1")

BASE_TIME = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def at(minutes):
    return BASE_TIME + timedelta(minutes=minutes)


class AppTestCase(unittest.TestCase):
    config_name = "testing"

    def setUp(self):
        self.app = create_app(self.config_name)
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        self.store = get_store(self.app)
        self.client = self.app.test_client()

    def tearDown(self):
        db.session.remove()
        db.drop_all()
        db.engine.dispose()
        self.ctx.pop()

    def seed_content(self, collection, tenant_id, title, created_at, **fields):
        return self.store.create(
            collection,
            tenant_id,
            {
                "title": title,
                "body": f"{title} body",
                "author_id": ADMIN.user_id,
                "created_at": created_at,
                **fields,
            },
        )

    def token_for(self, actor):
        from sitecms.auth.identity import issue_access_token

        with self.app.test_request_context():
            return issue_access_token(actor)

    def auth_headers(self, actor):
        return {"Authorization": f"Bearer {self.token_for(actor)}"}


class FileDatabaseTestCase(AppTestCase):
    """Runs against a SQLite file so the engine uses a real connection pool."""

    config_name = "testing-file"

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        file_config = type(
            "FileTestingConfig",
            (TestingConfig,),
            {"SQLALCHEMY_DATABASE_URI": f"sqlite:///{os.path.join(self.tmpdir, 'sitecms.db')}"},
        )
        patcher = mock.patch.dict(config_by_name, {self.config_name: file_config})
        patcher.start()
        self.addCleanup(patcher.stop)
        super().setUp()

    def tearDown(self):
        super().tearDown()
        shutil.rmtree(self.tmpdir, ignore_errors=True)
