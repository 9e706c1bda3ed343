import os
import tempfile

import pytest

# Point the app at a throwaway database before anything imports ivf_subsidy.db
_tmpdir = tempfile.mkdtemp(prefix="ivf_subsidy_test_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmpdir, 'test.db')}"
os.environ.setdefault("IVF_HISTORY_CAP", "10")


@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from ivf_subsidy.main import app

    with TestClient(app) as c:
        c.delete("/calculations/history")
        yield c
