"""
tests/test_errors.py
====================
Unexpected failures surface as a bare 500 envelope; details go to the log only.
"""
import logging

from fastapi.testclient import TestClient

from jobtracker.database import get_db
from jobtracker.main import app


class TestInternalErrors:

    def test_unexpected_exception_is_not_exposed(self, session_factory, make_user, headers_for, caplog):
        headers = headers_for(make_user("admin"))

        def _broken_db():
            raise RuntimeError("db password is hunter2")

        app.dependency_overrides[get_db] = _broken_db
        try:
            with caplog.at_level(logging.ERROR, logger="jobtracker.main"):
                with TestClient(app, raise_server_exceptions=False) as c:
                    r = c.get("/jobs", headers=headers)
        finally:
            app.dependency_overrides.clear()

        assert r.status_code == 500
        assert r.json() == {"success": False, "error": "Internal server error"}
        assert "hunter2" not in r.text
        assert "hunter2" in caplog.text
