import pytest

from alfred_todoist import settings
from alfred_todoist.env import get_env

ALFRED_VARIABLES = (
    "alfred_version",
    "alfred_workflow_data",
    "alfred_workflow_cache",
    "alfred_workflow_uid",
    "alfred_workflow_bundleid",
)


@pytest.fixture(autouse=True)
def isolated_workflow(tmp_path, monkeypatch):
    # No stray .env file or Alfred variables, and a fresh process-wide store per test
    monkeypatch.chdir(tmp_path)
    for name in ALFRED_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(settings, "_instance", None)
    get_env.cache_clear()
    yield
    get_env.cache_clear()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "Workflow Data" / "com.alfred-workflow-todoist"
